"""A small interactive command shell: tokenizer, parser, variable expansion, builtins and pipeline execution."""

__version__ = "0.1.0"