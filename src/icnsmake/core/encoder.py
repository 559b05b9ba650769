import logging as log

from .io.image import Image
from .enums import IconLayout, ResizeFilter
from .variants import IconVariant, IS32
from .icns import IcnsChunk
from . import packbits

ARGB_MARKER = b'ARGB'
IT32_PREFIX = b'\x00\x00\x00\x00'

class VariantEncoder():
	'''
	Resizes the source image to a variant's size and encodes it as that
	variant's payload: planar RGB, planar ARGB, an 8-bit mask or a PNG.
	'''

	variant_: IconVariant
	image: Image
	filter_: ResizeFilter

	def __init__(self, variant: IconVariant=IS32, image: Image|None=None, filter: ResizeFilter=ResizeFilter.Nearest) -> None:
		self.variant_ = variant
		self.image = image if image is not None else Image.blank((1, 1), dtype='uint8', color=(0, 0, 0))
		self.filter_ = filter

	def variant(self, variant: IconVariant) -> 'VariantEncoder':
		self.variant_ = variant
		return self

	def data(self, image: Image) -> 'VariantEncoder':
		self.image = image
		return self

	def filter(self, filter: ResizeFilter) -> 'VariantEncoder':
		self.filter_ = filter
		return self

	def resized(self) -> Image:
		size = self.variant_.size
		return self.image.to_uint8().resize((size, size), self.filter_)

	def rgb_image(self) -> bytes:
		''' Packs the R, G and B planes one after another. it32 gets a zero prefix. '''
		rgb = self.resized().normalize('RGB')
		prefix = IT32_PREFIX if self.variant_.has_prefix else b''
		return prefix + b''.join(packbits.encode(rgb.plane(i)) for i in range(3))

	def argb_image(self) -> bytes:
		rgba = self.resized().normalize('RGBA')
		return ARGB_MARKER + b''.join(packbits.encode(rgba.plane(i)) for i in (3, 0, 1, 2))

	def mask_image(self) -> bytes:
		# No compression
		return self.resized().normalize('LA').plane(1)

	def png_image(self) -> bytes:
		return Image.backend.encode_png(self.resized())

	def build(self) -> IcnsChunk:
		match self.variant_.layout:
			case IconLayout.RGB:	data = self.rgb_image()
			case IconLayout.ARGB:	data = self.argb_image()
			case IconLayout.MASK:	data = self.mask_image()
			case IconLayout.PNG:	data = self.png_image()

		log.debug(f'Encoded {self.variant_} into {len(data)} bytes')
		return IcnsChunk(self.variant_.tag, data)
