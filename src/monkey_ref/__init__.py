"""Reference tree-walking interpreter for the Monkey language."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
