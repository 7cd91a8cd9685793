""" A fluent builder for discord's REST API """

__version__ = "0.1.0"

from .config import *
from .facade import *
from .models import *
from .rest import *
