from .image import Image, IOBackend
from .pilio import PilIOBackend
from .imio import ImIOBackend
from ..enums import IOBackendKind

BACKENDS: dict[IOBackendKind, type[IOBackend]] = {
	IOBackendKind.Pillow:	PilIOBackend,
	IOBackendKind.ImageIO:	ImIOBackend,
}

def use_backend(kind: IOBackendKind) -> type[IOBackend]:
	backend = BACKENDS[kind]
	Image.set_backend(backend)
	return backend

# Default backend
Image.set_backend(PilIOBackend)
