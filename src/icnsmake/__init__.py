from .version import __version__
from .core import IcnsEncoder, IconVariant, ResizeFilter, Image, packbits

def init():
	import sys
	from .cli import main
	sys.exit(main())
