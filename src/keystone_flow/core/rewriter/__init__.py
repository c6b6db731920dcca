"""
Rewriter Package.

Each module handles one aspect of the async-to-flow rewrite; the
`keystone_flow.core.engine.FlowPass` coordinator composes them:

- Suspension: ``await x`` -> ``yield* _await(x)``.
- Wrapper: generator function -> ``_async(function* (this: C, ...) {...})``.
- Decorators: ``@autoFlow`` / ``async`` -> ``@modelFlow``.
- Class Identity: ``@autoModel`` -> ``@model("<name>")``.
- Imports: namespace import of the target package.
"""
