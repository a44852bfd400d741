from mdexport.main import main

raise SystemExit(main())
