class IcnsError(Exception):
	''' Base class for everything the encoder raises on purpose. '''

class PngEncodeFailed(IcnsError):
	def __init__(self, detail: str) -> None:
		super().__init__(f'Failed to encode PNG: {detail}')
		self.detail = detail

class TruncatedInput(IcnsError):
	''' A PackBits stream ended in the middle of a packet. '''

	def __init__(self, offset: int, needed: int, available: int) -> None:
		super().__init__(f'PackBits packet at offset {offset} needs {needed} bytes, but only {available} remain!')
		self.offset = offset

class EmptyVariantList(IcnsError):
	def __init__(self) -> None:
		super().__init__('No icon variants were requested!')

class DuplicateVariant(IcnsError):
	def __init__(self, tag: bytes) -> None:
		super().__init__(f'Icon variant {tag.decode("ascii", "replace")} was requested more than once!')
		self.tag = tag

class UnknownVariant(IcnsError, KeyError):
	def __init__(self, ident: object) -> None:
		super().__init__(f'Unknown icon variant {ident!r}!')
		self.ident = ident

	def __str__(self) -> str:
		return self.args[0]

class InvalidContainer(IcnsError):
	''' The byte string is not a well-framed icns container. '''

class BuildCancelled(IcnsError):
	def __init__(self, done: int, total: int) -> None:
		super().__init__(f'Build cancelled after {done} of {total} variants.')
		self.done = done
		self.total = total

class NoSourceImage(IcnsError, ValueError):
	def __init__(self) -> None:
		super().__init__('No source image set! Call source() first.')
