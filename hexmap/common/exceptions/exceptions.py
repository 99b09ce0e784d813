"""
Exceptions module goal is to create custom exceptions in order to raise propper errors,
which will make understandable problems for users.
"""


class BaseError(Exception):
    def __init__(self, *args):
        """
        Initializes the object with an optional message.

        Args:
            *args: An optional message to be stored in the object. If provided, it should be a single argument.

        Returns:
            None
        """
        super().__init__(*args)
        if args:
            self.message = args[0]
        else:
            self.message = None


class UnsupportedProjectionError(BaseError):
    def __str__(self):
        """
        Returns a string representation naming the CRS pair that could not be transformed.
        """
        if self.message:
            return f"Unsupported projection: {self.message}"
        else:
            return "Unsupported projection"


class MalformedGeometryError(BaseError):
    def __str__(self):
        if self.message:
            return f"Malformed geometry: {self.message}"
        else:
            return "Malformed geometry"


class SourceLoadFailureError(BaseError):
    def __str__(self):
        """
        Returns a string representation of the SourceLoadFailureError object. If the object has a message attribute,
        it returns a formatted string with the message. Otherwise, it returns the string "Geometry source could not be loaded".

        Returns:
            str: The string representation of the SourceLoadFailureError object.
        """
        if self.message:
            return f"Geometry source could not be loaded: {self.message}"
        else:
            return "Geometry source could not be loaded"
