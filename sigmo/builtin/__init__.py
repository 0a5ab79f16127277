from sigmo.builtin.env_builtin import register, BUILTINS, ALIASES

__all__ = ["register", "BUILTINS", "ALIASES"]
