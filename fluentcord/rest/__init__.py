""" This module contains the request builder for discord's REST API,
calls chained on a builder become the path of the request, so
nothing needs to be kept in sync with discord's list of endpoints.
"""

from .builders import *
from .client import *
from .errors import *
from .naming import *
from .reference import *
from .response import *
from .route import *
