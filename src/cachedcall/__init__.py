__version__ = "1.0"
__date__ = ""

from zuper_commons.logs import ZLogger

version = __version__

logger = ZLogger(__name__)
logger.hello_module(name=__name__, filename=__file__, version=__version__, date=__date__)

from .types import *
from .constants import *
from .exceptions import *
from .state import *
from .keys import *
from .table import *
from .scopes import *
from .mixin import *
from .decorators import *

logger.hello_module_finished(__name__)
