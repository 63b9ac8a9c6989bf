from ._option import NONE, NoneOption, Option, Some

__all__ = ["NONE", "NoneOption", "Option", "Some"]
