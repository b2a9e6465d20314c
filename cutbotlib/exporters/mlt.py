#!/usr/bin/env python3

"""
Write a chunk list as a Shotcut-loadable MLT XML project.
"""

import collections
import os
import lxml.etree
from cutbotlib.core import utils
from cutbotlib.core.errors import OutputWriteError

#============================================

MLT_VERSION = "7.27.0"
ZERO_TIME = "00:00:00.000"
MAIN_BIN_ID = "main_bin"
BACKGROUND_PRODUCER_ID = "black"
BACKGROUND_PLAYLIST_ID = "background"
CHUNK_PLAYLIST_ID = "playlist0"
TRACTOR_ID = "tractor0"

DEFAULT_PROFILE = {
	'width': 2560,
	'height': 1440,
	'frame_rate_num': 60000000,
	'frame_rate_den': 1000000,
	'colorspace': 709,
}

TimelineOptions = collections.namedtuple('TimelineOptions',
	['chunks', 'duration', 'resource', 'output_file', 'profile'],
	defaults=[None, None])

#============================================

def chain_id(index: int) -> str:
	return f"chain{index}"

#============================================
class MltTimelineBuilder():
	def __init__(self, options: TimelineOptions):
		if options.duration is None or options.duration <= 0:
			raise ValueError("timeline duration must be positive")
		self.options = options
		self.profile = options.profile or DEFAULT_PROFILE
		self.total_time = utils.format_time(options.duration)
		self.root = None

	#============================
	def build(self):
		"""
		Build the MLT element tree.

		Every chain spans the whole source; the chunk window is carried
		only by the in/out of its playlist entry.
		"""
		self.root = lxml.etree.Element('mlt')
		self.root.set('LC_NUMERIC', 'C')
		self.root.set('version', MLT_VERSION)
		self.root.set('producer', MAIN_BIN_ID)
		self._emit_profile()
		self._emit_main_bin()
		self._emit_background()
		for index in range(len(self.options.chunks)):
			self._emit_chain(index)
		self._emit_chunk_playlist()
		self._emit_tractor()
		return self.root

	#============================
	def _emit_profile(self) -> None:
		width = self.profile['width']
		height = self.profile['height']
		(display_num, display_den) = utils.reduce_fraction(width, height)
		profile = lxml.etree.SubElement(self.root, 'profile')
		profile.set('width', str(width))
		profile.set('height', str(height))
		profile.set('progressive', '1')
		profile.set('sample_aspect_num', '1')
		profile.set('sample_aspect_den', '1')
		profile.set('display_aspect_num', str(display_num))
		profile.set('display_aspect_den', str(display_den))
		profile.set('frame_rate_num', str(self.profile['frame_rate_num']))
		profile.set('frame_rate_den', str(self.profile['frame_rate_den']))
		profile.set('colorspace', str(self.profile['colorspace']))

	#============================
	def _emit_main_bin(self) -> None:
		playlist = lxml.etree.SubElement(self.root, 'playlist')
		playlist.set('id', MAIN_BIN_ID)

	#============================
	def _emit_background(self) -> None:
		producer = lxml.etree.SubElement(self.root, 'producer')
		producer.set('id', BACKGROUND_PRODUCER_ID)
		producer.set('in', ZERO_TIME)
		producer.set('out', self.total_time)
		self._set_property(producer, 'mlt_service', 'color')
		self._set_property(producer, 'resource', '#000000')
		playlist = lxml.etree.SubElement(self.root, 'playlist')
		playlist.set('id', BACKGROUND_PLAYLIST_ID)
		self._emit_entry(playlist, BACKGROUND_PRODUCER_ID, ZERO_TIME,
			self.total_time)

	#============================
	def _emit_chain(self, index: int) -> None:
		chain = lxml.etree.SubElement(self.root, 'chain')
		chain.set('id', chain_id(index))
		chain.set('in', ZERO_TIME)
		chain.set('out', self.total_time)
		self._set_property(chain, 'resource', self.options.resource)

	#============================
	def _emit_chunk_playlist(self) -> None:
		playlist = lxml.etree.SubElement(self.root, 'playlist')
		playlist.set('id', CHUNK_PLAYLIST_ID)
		for index, chunk in enumerate(self.options.chunks):
			self._emit_entry(playlist, chain_id(index),
				utils.format_time(chunk['start']), utils.format_time(chunk['end']))

	#============================
	def _emit_entry(self, playlist_elem, producer_id: str, in_time: str,
		out_time: str) -> None:
		entry = lxml.etree.SubElement(playlist_elem, 'entry')
		entry.set('producer', producer_id)
		entry.set('in', in_time)
		entry.set('out', out_time)

	#============================
	def _emit_tractor(self) -> None:
		tractor = lxml.etree.SubElement(self.root, 'tractor')
		tractor.set('id', TRACTOR_ID)
		tractor.set('in', ZERO_TIME)
		tractor.set('out', self.total_time)
		self._set_property(tractor, 'shotcut', '1')
		self._set_property(tractor, 'shotcut:projectAudioChannels', '2')
		self._set_property(tractor, 'shotcut:projectFolder', '0')
		self._set_property(tractor, 'shotcut:skipConvert', '0')
		for playlist_id in (BACKGROUND_PLAYLIST_ID, CHUNK_PLAYLIST_ID):
			track = lxml.etree.SubElement(tractor, 'track')
			track.set('producer', playlist_id)

	#============================
	def _set_property(self, parent, name: str, value: str) -> None:
		prop = lxml.etree.SubElement(parent, 'property')
		prop.set('name', name)
		prop.text = value

	#============================
	def serialize(self) -> bytes:
		if self.root is None:
			self.build()
		return lxml.etree.tostring(self.root, encoding='utf-8',
			xml_declaration=True, pretty_print=True)

	#============================
	def write(self) -> str:
		output_file = self.options.output_file
		if output_file is None:
			raise OutputWriteError("no output file set for MLT export")
		data = self.serialize()
		try:
			os.makedirs(os.path.dirname(output_file) or '.', exist_ok=True)
			with open(output_file, 'wb') as handle:
				handle.write(data)
		except OSError as exc:
			raise OutputWriteError(f"failed to write {output_file}: {exc}",
				path=output_file) from exc
		return output_file

#============================================

def build_timeline(chunks: list, duration: float, resource: str,
	profile: dict = None):
	options = TimelineOptions(chunks, duration, resource, profile=profile)
	return MltTimelineBuilder(options).build()
