from depinspector.cli import main

raise SystemExit(main())
