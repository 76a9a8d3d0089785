from __future__ import annotations

from edition_picker.main import main

if __name__ == "__main__":
    raise SystemExit(main())
