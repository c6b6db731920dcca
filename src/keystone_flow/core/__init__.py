"""
Core Package.

Contains the rewrite machinery:
- Syntax tree nodes and traversal
- Host capability probes
- Rewriters (suspension, wrapper, decorators, class identity, imports)
- The Pass Coordinator (engine)
"""
