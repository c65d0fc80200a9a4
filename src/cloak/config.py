"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    Override what you need::

        config = AppConfig(debug=True)
    """

    # Show tracebacks in 500 response bodies
    debug: bool = False

    # Name sent in the ``Server`` response header ("" to omit)
    server_header: str = ""
