"""Allow `python -m script_catalog ...`."""

from script_catalog.cli.main import main

raise SystemExit(main())
