from passgen.main import main

raise SystemExit(main())
