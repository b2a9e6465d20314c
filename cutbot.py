#!/usr/bin/env python3

import argparse
from cutbotlib.core import config
from cutbotlib.core import utils
from cutbotlib.core.project import SilenceProject
from cutbotlib.media import melt

#============================================

def parse_args(argv: list = None):
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(
		description="Build Shotcut MLT projects from silence detection")
	subparsers = parser.add_subparsers(dest='command', required=True)

	silence_parser = subparsers.add_parser('silence',
		help='split a recording into loud and silent chunks')
	silence_parser.add_argument('input_file',
		help='source video or audio file')
	silence_parser.add_argument('-o', '--output', dest='output_file',
		help='MLT output path, default is output.mlt next to the source')
	silence_parser.add_argument('-n', '--dry-run', dest='dry_run', action='store_true',
		help='analyze and build the timeline without writing the MLT file')

	concat_parser = subparsers.add_parser('concat',
		help='merge every .mkv in a folder into pass1.mlt with melt')
	concat_parser.add_argument('input_folder',
		help='folder holding the recordings')

	config_parser = subparsers.add_parser('config',
		help='write the default config file')
	config_parser.add_argument('-o', '--output', dest='output_file',
		default='cutbot.config.yaml', help='config file path to write')

	for sub in (silence_parser, concat_parser):
		sub.add_argument('-c', '--config', dest='config_file',
			help='cutbot config YAML with tool paths and thresholds')
		sub.add_argument('-q', '--quiet', dest='quiet', action='store_true',
			help='do not print commands or the summary')
		sub.set_defaults(quiet=False)
	args = parser.parse_args(argv)
	return args

#============================================

def main(argv: list = None):
	args = parse_args(argv)
	if args.command == 'config':
		config.write_config_file(args.output_file, config.default_config())
		print(f"wrote {args.output_file}")
		return
	utils.set_quiet_mode(args.quiet)
	settings = config.load_settings(args.config_file)
	if args.command == 'silence':
		project = SilenceProject(args.input_file, settings,
			output_override=args.output_file, dry_run=args.dry_run)
		project.run()
		return
	if args.command == 'concat':
		output_file = melt.concat_folder(args.input_folder, settings)
		if not utils.is_quiet_mode():
			print(f"wrote {output_file}")
		return


if __name__ == '__main__':
	main()
