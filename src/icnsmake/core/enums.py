from enum import IntEnum, Enum

class IconLayout(IntEnum):
	RGB		= 0		# 24-bit planar RGB, each plane PackBits-compressed
	ARGB	= 1		# 'ARGB' marker followed by planar ARGB, each plane PackBits-compressed
	MASK	= 2		# 8-bit alpha plane, uncompressed
	PNG		= 3		# Embedded PNG stream

class ResizeFilter(Enum):
	Nearest		= 'nearest'
	Triangle	= 'triangle'
	CatmullRom	= 'catmullrom'
	Lanczos3	= 'lanczos3'

class IOBackendKind(Enum):
	Pillow	= 'pillow'
	ImageIO	= 'imageio'
