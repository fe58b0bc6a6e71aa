from shortlinker.models.url_detail_model import URLDetailModel


__all__ = ['URLDetailModel']
