from .catalog import Catalog
from .loader import LoadedData, load_project

__all__ = ["Catalog", "LoadedData", "load_project"]
