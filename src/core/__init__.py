"""
Core domain models, codecs, and numeric primitives.

This module contains the foundational building blocks that are independent
of the hosting environment (browser, webview, extension, mini-program).
"""
