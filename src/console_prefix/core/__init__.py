"""
Core Package.

Contains the transform itself:
- Prefix generation from the effective configuration
- The console call rewriter
- The engine driving one compilation unit
"""
