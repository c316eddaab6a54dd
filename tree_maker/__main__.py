from tree_maker.generate_tree import main

raise SystemExit(main())
