from dataclasses import dataclass
from .enums import IconLayout
from .errors import UnknownVariant

'''
Icon variants that can be stored in an icns container.
Not every OSType is covered, only the ones that can be generated from a single source image.
https://en.wikipedia.org/wiki/Apple_Icon_Image_format#Icon_types
'''

@dataclass(frozen=True)
class IconVariant():
	tag: bytes
	''' The four-byte OSType of the chunk. '''
	size: int
	''' Side length in pixels. All variants are square. '''
	layout: IconLayout

	@property
	def name(self) -> str:
		return self.tag.decode('ascii')

	@property
	def has_prefix(self) -> bool:
		''' it32 payloads carry four zero bytes before the packed planes. '''
		return self.tag == b'it32'

	def __str__(self) -> str:
		return f'{self.name} ({self.size}x{self.size} {self.layout.name})'

	@staticmethod
	def get(ident: 'str|bytes|IconVariant') -> 'IconVariant':
		''' Looks up a variant by tag (b'ic08' / 'ic08') or member name ('IC08'). '''
		if isinstance(ident, IconVariant): return ident
		key = ident.encode('ascii', 'replace') if isinstance(ident, str) else bytes(ident)
		found = BY_TAG.get(key) or BY_TAG.get(key.lower())
		if found is None: raise UnknownVariant(ident)
		return found

	@staticmethod
	def recommended() -> list['IconVariant']:
		return [v for v in CATALOG if v not in LEGACY_PNG]

	@staticmethod
	def all() -> list['IconVariant']:
		return list(CATALOG)


IS32 = IconVariant(b'is32',   16, IconLayout.RGB)	# System 8.5+
IL32 = IconVariant(b'il32',   32, IconLayout.RGB)	# System 8.5+
IH32 = IconVariant(b'ih32',   48, IconLayout.RGB)	# System 8.5+
IT32 = IconVariant(b'it32',  128, IconLayout.RGB)	# Mac OS X 10.0+
S8MK = IconVariant(b's8mk',   16, IconLayout.MASK)	# System 8.5+
L8MK = IconVariant(b'l8mk',   32, IconLayout.MASK)	# System 8.5+
H8MK = IconVariant(b'h8mk',   48, IconLayout.MASK)	# System 8.5+
T8MK = IconVariant(b't8mk',  128, IconLayout.MASK)	# Mac OS X 10.0+
IC04 = IconVariant(b'ic04',   16, IconLayout.ARGB)
IC05 = IconVariant(b'ic05',   32, IconLayout.ARGB)
IC07 = IconVariant(b'ic07',  128, IconLayout.PNG)	# Mac OS X 10.7+
IC08 = IconVariant(b'ic08',  256, IconLayout.PNG)	# Mac OS X 10.5+
IC09 = IconVariant(b'ic09',  512, IconLayout.PNG)	# Mac OS X 10.5+
IC10 = IconVariant(b'ic10', 1024, IconLayout.PNG)	# Mac OS X 10.7+, 512x512@2x
IC11 = IconVariant(b'ic11',   32, IconLayout.PNG)	# Mac OS X 10.8+, 16x16@2x
IC12 = IconVariant(b'ic12',   64, IconLayout.PNG)	# Mac OS X 10.8+, 32x32@2x
IC13 = IconVariant(b'ic13',  256, IconLayout.PNG)	# Mac OS X 10.8+, 128x128@2x
IC14 = IconVariant(b'ic14',  512, IconLayout.PNG)	# Mac OS X 10.8+, 256x256@2x
ICP4 = IconVariant(b'icp4',   16, IconLayout.PNG)	# Mac OS X 10.7+
ICP5 = IconVariant(b'icp5',   32, IconLayout.PNG)	# Mac OS X 10.7+
ICP6 = IconVariant(b'icp6',   64, IconLayout.PNG)	# Mac OS X 10.7+

CATALOG: tuple[IconVariant, ...] = (
	IS32, IL32, IH32, IT32,
	S8MK, L8MK, H8MK, T8MK,
	IC04, IC05,
	IC07, IC08, IC09, IC10, IC11, IC12, IC13, IC14,
	ICP4, ICP5, ICP6,
)

# Excluded from the recommended set.
LEGACY_PNG = frozenset((ICP4, ICP5, ICP6))

BY_TAG: dict[bytes, IconVariant] = {v.tag: v for v in CATALOG}
BY_TAG.update({v.tag.upper(): v for v in CATALOG})

assert len({v.tag for v in CATALOG}) == len(CATALOG), 'Duplicate tag in variant catalog!'
