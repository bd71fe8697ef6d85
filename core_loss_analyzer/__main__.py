import sys

from core_loss_analyzer.cli import main

sys.exit(main())
