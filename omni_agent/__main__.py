import sys

from omni_agent.cli import main

sys.exit(main())
