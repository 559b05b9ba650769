from pathlib import Path
from argparse import ArgumentParser, Namespace
from logging import DEBUG, INFO, basicConfig, FileHandler, root
import logging as log

from .version import __version__
from .core.config import AppConfig, load_config, save_config, get_root
from .core.enums import ResizeFilter, IOBackendKind
from .core.variants import IconVariant
from .core.builder import EncoderConfig, build_icns
from .core.io import use_backend
from .core.io.image import Image
from .core.errors import IcnsError

def make_parser() -> ArgumentParser:
	parser = ArgumentParser('icnsmake', description='Packs a single image into an Apple icns file.')
	parser.add_argument('source', nargs='?', help='The source image. Should be square and at least 1024x1024.')
	parser.add_argument('--target', dest='target', default=None, help='The output path. Defaults to the source path with an .icns suffix.')
	parser.add_argument('--variants', default=None, help='Comma-separated OSTypes (e.g. "ic08,ic09"), "recommended" or "all". Overrides the config.')
	parser.add_argument('--filter', default=None, choices=[f.value for f in ResizeFilter], help='The resampling filter. Overrides the config.')
	parser.add_argument('--backend', default=None, choices=[b.value for b in IOBackendKind], help='The library used to read the source. Overrides the config.')
	parser.add_argument('--config', help='Uses the specified config path instead of the installation config path.')
	parser.add_argument('--save-config', action='store_true', help='Writes the effective options back to the config file.')
	parser.add_argument('--logfile', help='Writes errors and information to the specified file.')
	parser.add_argument('--verbose', '-v', action='store_true', help='Logs every encoded variant.')
	parser.add_argument('--list', action='store_true', help='Lists the known icon variants and exits.')
	parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
	return parser

def parse_variants(value: str) -> list[IconVariant]:
	match value.strip().lower():
		case 'recommended': return IconVariant.recommended()
		case 'all': return IconVariant.all()
		case '': return []
	return [IconVariant.get(tag.strip()) for tag in value.split(',') if tag.strip()]

def apply_args(conf: AppConfig, args: Namespace) -> AppConfig:
	''' Returns a copy of the config with command line overrides applied. '''
	conf = conf.copy()
	if args.variants is not None:	conf.variants = [v.name for v in parse_variants(args.variants)]
	if args.filter is not None:		conf.filter = ResizeFilter(args.filter)
	if args.backend is not None:	conf.backend = IOBackendKind(args.backend)
	return conf

def list_variants() -> None:
	recommended = IconVariant.recommended()
	for variant in IconVariant.all():
		print(f'{variant.name}  {variant.size:>4}x{variant.size:<4}  {variant.layout.name:<4}  {"*" if variant in recommended else ""}')
	print('\n* = recommended')

def run(args: Namespace) -> int:
	if args.list:
		list_variants()
		return 0

	if args.source is None:
		log.error('No source image given!')
		return 1

	try:
		conf = apply_args(load_config(args.config), args)
		variants = conf.get_variants()
	except IcnsError as e:
		log.error(str(e))
		return 1

	if args.save_config:
		save_config(conf)

	path_src = Path(args.source)
	if not path_src.is_file():
		log.error(f'Source path {path_src} does not exist!')
		return 1

	use_backend(conf.backend)
	try:
		image = Image.load(path_src)
	except (OSError, ValueError) as e:
		log.error(f'Failed to read {path_src}: {e}')
		return 1

	width, height = image.size
	if width != height:
		log.warning(f'Source image is not square ({width}x{height}); variants will be stretched.')
	if max(width, height) < max((v.size for v in variants), default=0):
		log.warning(f'Source image ({width}x{height}) is smaller than the largest variant; it will be upscaled.')

	try:
		data = build_icns(EncoderConfig(image, tuple(variants), conf.filter, conf.rejectEmpty))
	except IcnsError as e:
		log.error(f'The export failed! {e}')
		return 1

	path_target = Path(args.target) if args.target else path_src.with_suffix('.icns')
	log.info(f'Saving file {path_target} ...')
	with open(path_target, 'wb') as file:
		file.write(data)

	return 0

def main(argv: list[str]|None=None) -> int:
	args = make_parser().parse_args(argv)

	basicConfig(level=DEBUG if args.verbose else INFO, format='%(levelname)s: %(message)s')
	if args.logfile != None:
		root.addHandler(FileHandler(get_root() / args.logfile))

	return run(args)
