"""Building blocks of a small command shell: lexer, environment, builtins and pipeline executor."""

__version__ = "0.1.0"