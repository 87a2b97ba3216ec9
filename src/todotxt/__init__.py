"""todo.txt task list: line parser, file store and query helpers."""

__version__ = "0.1.0"
