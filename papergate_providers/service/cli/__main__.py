"""``python -m papergate_providers.service.cli`` entry.

Same behaviour and exit codes as the ``papergate-cli`` script.
"""

from __future__ import annotations

from . import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
