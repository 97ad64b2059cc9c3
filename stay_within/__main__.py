from .tracker import main

raise SystemExit(main())
