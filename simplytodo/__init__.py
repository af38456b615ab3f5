"""SimplyTodo backend: recurring rules and their task instances."""

__version__ = "1.0.0"
