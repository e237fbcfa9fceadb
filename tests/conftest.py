from __future__ import annotations

import os

# Keep telelog off the terminal while pytest captures output.
os.environ.setdefault("MODAL_NAV_DISABLE_CONSOLE", "1")
