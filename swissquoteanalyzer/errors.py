"""Exceptions raised by the statement analyzer.

Missing optional data (no reference, no ISIN, ...) is never an error; these
only cover conditions that stop a command.
"""


class StatementError(RuntimeError):
  pass


class StatementNotFoundError(StatementError):
  """The input PDF or JSON file does not exist."""


class StatementLoadError(StatementError):
  """A previously written statement JSON could not be read back."""


class LayoutError(StatementError):
  """A layout override file is malformed or names unknown bands."""
