from dataclasses import dataclass, field
from typing import Callable, Iterable
from time import perf_counter
import logging as log

from .io.image import Image
from .enums import ResizeFilter
from .variants import IconVariant
from .encoder import VariantEncoder
from .icns import IconFamily
from .errors import EmptyVariantList, DuplicateVariant, BuildCancelled, NoSourceImage

@dataclass(frozen=True)
class EncoderConfig():
	image: Image
	variants: tuple[IconVariant, ...] = field(default_factory=lambda: tuple(IconVariant.recommended()))
	filter: ResizeFilter = ResizeFilter.Nearest
	reject_empty: bool = True
	''' If false, an empty variant list produces a container holding only the (empty) TOC. '''

def build_icns(config: EncoderConfig, should_cancel: Callable[[], bool]|None=None) -> bytes:
	''' Encodes every requested variant and assembles the container. Nothing is returned on failure. '''
	if not config.variants and config.reject_empty:
		raise EmptyVariantList()

	seen: set[bytes] = set()
	for variant in config.variants:
		if variant.tag in seen: raise DuplicateVariant(variant.tag)
		seen.add(variant.tag)

	if not config.image.has_transparency():
		log.debug('Source image is fully opaque; masks will be solid.')

	TIME_BEFORE = perf_counter()
	family = IconFamily()
	encoder = VariantEncoder(image=config.image, filter=config.filter)

	for i, variant in enumerate(config.variants):
		if should_cancel is not None and should_cancel():
			raise BuildCancelled(i, len(config.variants))
		family.add(encoder.variant(variant).build())

	data = family.build()
	TIME_AFTER = perf_counter()
	log.info(f'Built icns with {len(config.variants)} variants ({len(data)} bytes) in {round((TIME_AFTER - TIME_BEFORE) * 1000, 2)}ms')
	return data

class IcnsEncoder():
	'''
	Fluent front end for build_icns. Setters return the encoder, and build()
	can be called any number of times.

	>>> data = IcnsEncoder().source(Image.load('icon.png')).variants(IconVariant.recommended()).build()
	'''

	image: Image|None
	variants_: tuple[IconVariant, ...]
	filter_: ResizeFilter
	reject_empty: bool

	def __init__(self, reject_empty: bool=True) -> None:
		self.image = None
		self.variants_ = ()
		self.filter_ = ResizeFilter.Nearest
		self.reject_empty = reject_empty

	def source(self, image: Image) -> 'IcnsEncoder':
		self.image = image
		return self

	def variants(self, variants: Iterable[IconVariant|str|bytes]) -> 'IcnsEncoder':
		self.variants_ = tuple(IconVariant.get(v) for v in variants)
		return self

	def filter(self, filter: ResizeFilter) -> 'IcnsEncoder':
		self.filter_ = filter
		return self

	def config(self) -> EncoderConfig:
		if self.image is None: raise NoSourceImage()
		return EncoderConfig(self.image, self.variants_, self.filter_, self.reject_empty)

	def build(self, should_cancel: Callable[[], bool]|None=None) -> bytes:
		return build_icns(self.config(), should_cancel)
