from .server.registrants import snippets

assert snippets

____ = None
