from .language_service import ERROR_TYPE, ErrorNodeName, LanguageService, Symbol, Type
