from guillotine.main import main

raise SystemExit(main())
