from .config import AdminConfig, ConfigError, load_config
from .exceptions import ApiError, ColumnDefinitionError, TableConfigError

__version__ = "0.1.0"

__all__ = [
    "AdminConfig",
    "ApiError",
    "ColumnDefinitionError",
    "ConfigError",
    "TableConfigError",
    "__version__",
    "load_config",
]
