from tinifier.cli.app import main


raise SystemExit(main())
