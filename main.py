import sys
from pathlib import Path

# Run from a source checkout
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from icnsmake import init

if __name__ == '__main__':
	init()
