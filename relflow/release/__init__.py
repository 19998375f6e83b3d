"""Release bounded context.

- changelog: release notes lookup per package
- resolver: publish set, tag granularity, merged notes
- metadata: registry fields required before publishing
- actions: ordered external actions for the pipeline driver
- service: end-to-end planning
"""

from __future__ import annotations
