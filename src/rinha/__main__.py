import sys

from rinha.main import main

sys.exit(main())
