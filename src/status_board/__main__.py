# src/status_board/__main__.py

from .cli.main import main

raise SystemExit(main())
