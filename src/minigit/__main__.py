from minigit.cli import main

raise SystemExit(main())
