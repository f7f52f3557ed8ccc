# Filename: __init__.py
# Author: Rich Lewis @RichLewis007
# Description: Worker components package for background tasks. Exports the batch executor used
#              by the command line and the Qt worker that empties the trash for the viewer.

__all__ = ["batch_executor", "empty_worker"]
