from ognfeed.main import main

raise SystemExit(main())
