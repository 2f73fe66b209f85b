"""meow: local semantic file search for your home folders."""
