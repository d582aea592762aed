from mclone_launcher.launcher import main

raise SystemExit(main())
