from suffix_index.cli import main

raise SystemExit(main())
