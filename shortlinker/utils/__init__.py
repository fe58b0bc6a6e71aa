from shortlinker.utils.config import app_env, app_name, app_prefix, load_config
from shortlinker.utils.helpers import require_environment, guarantee_500_response
from shortlinker.utils.logging import initialize_logging
from shortlinker.utils.runtime import env_flag, running_locally


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
    'running_locally',
    'env_flag',
]
