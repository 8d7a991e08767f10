from verbalcalc.cli import main

raise SystemExit(main())
