"""Package synchronization engine.

Reconciles the manifest with the cached package repositories and the files
materialized in the project:
- Cache: clone or fast-forward each package's repository
- Pinner: resolve and check out the pinned revision
- Links: infer the folder mapping when none is configured
- Orchestrator: the install / add / update / create / apply flows
"""
