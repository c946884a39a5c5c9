from __future__ import annotations

OK = 0
ERR_USAGE = 2
ERR_CONFIG = 3
ERR_FILESYSTEM = 4
ERR_COMPILER = 5
ERR_INTERNAL = 99
