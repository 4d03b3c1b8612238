"""
Interfaces layer package.

Entry points into the application: the price feed subscriber with its
per-symbol dispatcher, and the composition root wiring adapters into
use cases.
"""
