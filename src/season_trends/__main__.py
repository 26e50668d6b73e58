from season_trends.main import main

raise SystemExit(main())
