from .core import load_lang, t, translator

__all__ = ["load_lang", "t", "translator"]
