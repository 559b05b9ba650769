from traceback import format_exc
from dataclasses import dataclass, asdict, field

from pathlib import Path
import logging as log
import sys, json

from .enums import ResizeFilter, IOBackendKind
from .variants import IconVariant

CONFIG_NAME = 'appconfig.json'

__config__: 'AppConfig'
__configPath__: Path

''' Get application root path '''

if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
	root_path = Path(getattr(sys, '_MEIPASS')).parent
else:
	root_path = Path('./').resolve()

def get_root() -> Path:
	return root_path

''' Config structures '''

@dataclass
class AppConfig():
	variants: list[str] = field(default_factory=lambda: [v.name for v in IconVariant.recommended()])
	''' The OSTypes to generate, in output order. '''
	filter: ResizeFilter = ResizeFilter.Nearest
	''' The resampling filter used when scaling the source to each variant size. '''
	backend: IOBackendKind = IOBackendKind.Pillow
	''' The library used to read source images. '''
	rejectEmpty: bool = True
	''' If false, an empty variant list writes a container with an empty table of contents. '''

	def encode(self):
		return {
			**asdict(self),
			"filter": self.filter.value,
			"backend": self.backend.value,
		}

	@staticmethod
	def decode(data) -> 'AppConfig':
		assert isinstance(data, dict)
		appConfig = AppConfig(**{
			**data,
			"filter": ResizeFilter(data.get("filter", ResizeFilter.Nearest.value)),
			"backend": IOBackendKind(data.get("backend", IOBackendKind.Pillow.value)),
		})

		# Reject unknown tags up front
		for tag in appConfig.variants: IconVariant.get(tag)
		return appConfig

	def copy(self):
		return AppConfig(**{
			**asdict(self),
			"variants": list(self.variants)
		})

	def get_variants(self) -> list[IconVariant]:
		return [IconVariant.get(tag) for tag in self.variants]

def load_config(pathOverride: str|None=None) -> AppConfig:
	log.info("Attempting to load configuration...")
	global __config__, __configPath__

	# Custom config path
	if pathOverride != None:
		__configPath__ = Path(pathOverride)
		if __configPath__.is_dir():
			__configPath__ = __configPath__ / CONFIG_NAME

	# Default config path
	else:
		__configPath__ = root_path / CONFIG_NAME

	# Use defaults if no config exists
	if not __configPath__.is_file():
		log.info(f'No configuration at {__configPath__}, using defaults.')
		__config__ = AppConfig()
		return __config__

	parsed: AppConfig

	try:
		with open(__configPath__, 'rb') as file:
			data = json.load(file)
			parsed = AppConfig.decode(data)

	except Exception:
		log.warning(f'Failed to parse the configuration! Falling back to defaults.\n\n{format_exc()}')
		parsed = AppConfig()

	__config__ = parsed
	return parsed

def save_config(conf: AppConfig):
	assert __configPath__, 'Config path not loaded yet!'
	with open(__configPath__, 'w') as file:
		json.dump(conf.encode(), file, indent='\t')

def make_config():
	log.info('Writing new configuration...')
	config = AppConfig()
	save_config(config)
	return config
