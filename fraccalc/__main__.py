from fraccalc.cli import main

raise SystemExit(main())
