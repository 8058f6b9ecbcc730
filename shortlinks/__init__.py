"""Core logic for the short link service."""

from .shortcode import ShortCodeGenerator
from .allocator import CodeAllocator
from .resolver import RedirectResolver
from .service import LinkService

__all__ = ["ShortCodeGenerator", "CodeAllocator", "RedirectResolver", "LinkService"]
