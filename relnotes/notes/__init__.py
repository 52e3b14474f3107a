"""Release notes pipeline.

The pipeline is split into:
- tag: release tag validation
- repos: repository selection and ordering
- window: commit window resolution from previous releases
- collector: per-repository history collection
- markdown: section rendering
- assembler: document assembly
- publisher: release creation and asset upload
- workspace: scoped temporary workspace
- service: end-to-end run
"""

from __future__ import annotations
