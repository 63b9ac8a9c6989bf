from ._config import Config, get_config, set_config
from ._depreciation import deprecated, renamed
from ._main import Pipeable

__all__ = [
    "Config",
    "Pipeable",
    "deprecated",
    "get_config",
    "renamed",
    "set_config",
]
