from .exceptions import BaseError, UnsupportedProjectionError, MalformedGeometryError, SourceLoadFailureError
