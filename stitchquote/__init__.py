"""StitchQuote - custom embroidery pricing and customization engine.

Turns uploaded designs, patch dimensions and embroidery option selections
into reproducible price quotes, and keeps in-progress customizations in a
size-bounded snapshot store.
"""

__version__ = "0.1.0"
__author__ = "StitchQuote Team"
