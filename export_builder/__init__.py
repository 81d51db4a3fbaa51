"""Export Builder - batch export of document artifacts through an external processor

Exports every artifact listed in a document manifest into a scratch directory,
runs one processor per artifact and reports aggregate progress while they run.
"""

__version__ = "0.1.0"
__author__ = "Export Builder Team"
