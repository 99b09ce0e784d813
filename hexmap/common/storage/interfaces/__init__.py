from .cacheable_interface import Cacheable
from .disposable_interface import IDisposable
