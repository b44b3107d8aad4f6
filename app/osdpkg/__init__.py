"""osdpkg - package selection for OS deployment task sequences."""

import logging

__version__ = "0.1.0"

# Log records only go to the CMTrace file once the CLI configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())
