"""
Assessment Criteria Engine
==========================
Configures how client organizations are scored against a compliance
framework: the scoring methodology, its capability levels, and the
100-point weight budget spread across the framework's domains.

One criteria document is kept per framework and replaced wholesale on save.
"""

__version__ = "1.0.0"
__author__ = "Assessment Criteria Engine"
