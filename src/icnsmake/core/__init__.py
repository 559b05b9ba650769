from .enums import IconLayout, ResizeFilter, IOBackendKind
from .variants import IconVariant
from .icns import IcnsChunk, IconFamily, ICNS
from .encoder import VariantEncoder
from .builder import EncoderConfig, IcnsEncoder, build_icns
from .io.image import Image
from . import packbits, errors
