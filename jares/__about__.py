__version__ = "0.3.0"
__description__ = "jares : JSON:API resource serialization with compound documents"
