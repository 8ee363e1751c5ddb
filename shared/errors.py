class ToolError(Exception):
    """Base class for errors that are reported back to the caller of a tool."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class AuthError(ToolError):
    """Raised when the credential context cannot produce a usable client configuration."""


class AuthInvalid(AuthError):
    """Raised when the upstream auth layer marked the credentials as invalid."""
    def __init__(self, message="Authentication required. Please authenticate first.", auth_url=None):
        self.auth_url = auth_url
        super().__init__(message)


class MissingToken(AuthError):
    def __init__(self, message="Authentication failed: No access token available. Please ensure you are authenticated."):
        super().__init__(message)


class MissingDomain(AuthError):
    def __init__(self, message="Shopify domain is required. Please provide the shop domain in the x-mkp-shopify-domain header."):
        super().__init__(message)


class InvalidDomain(AuthError):
    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"Invalid shop name: '{domain}'")


class InvalidInputError(ToolError, ValueError):
    """Raised when caller-supplied input is rejected before any request is made."""


class InvalidAddress(InvalidInputError):
    def __init__(self, field: str, address: str):
        self.field = field
        self.address = address
        super().__init__(f"{field} email address is invalid: {address}")
