import io
import os
import sys
import typing

from .util import Struct, parse_int


# the search stops once the byte range [low, high) is narrower than this
CONVERGENCE_THRESHOLD = 20


def _int_or_zero(s) -> int:
	return parse_int(s, default=0)


class AccessionRecord(Struct):
	"""
	one line of an acc2tax_{nucl,prot}_all.txt file:
	accession<TAB>version<TAB>taxid<TAB>gi

	missing trailing fields read as empty version and 0 taxid/gi
	"""
	accession = Struct.field(0, default="")
	version = Struct.field(1, default="")
	taxid = Struct.field(2, type_cast=_int_or_zero, default=0)
	gi = Struct.field(3, type_cast=_int_or_zero, default=0)

	@classmethod
	def from_line(cls, raw_line: bytes):
		# latin-1 maps bytes 1:1, so str order equals byte order
		line = raw_line.rstrip(b"\r\n").decode("latin-1")
		return cls(line.split("\t"))

	def key(self) -> bytes:
		return self.accession.encode("latin-1")

	def __repr__(self):
		return "%s(%r, %r, %d, %d)" % (type(self).__name__, self.accession,
			self.version, self.taxid, self.gi)


class SortedTextFile(object):
	"""
	random access to the lines of a newline-terminated text file opened in
	binary mode, addressed by arbitrary byte offsets

	ARGUMENTS
	fp:
	  seekable binary file object
	block_size:
	  number of bytes read per step when scanning back for a line boundary
	"""
	def __init__(self, fp: io.IOBase, block_size: int = 256):
		self.fp = fp
		self.block_size = block_size
		self.fp.seek(0, os.SEEK_END)
		self.size = self.fp.tell()
		return

	def line_at(self, pos: int) -> typing.Tuple[int, bytes]:
		"""
		locate the line holding byte pos and return (line_start, line); when
		pos is itself a newline, the line following it is returned
		"""
		start = self.find_line_start(pos)
		self.fp.seek(start)
		return start, self.fp.readline()

	def find_line_start(self, pos: int) -> int:
		# scan back from pos (inclusive) to the nearest newline
		end = pos + 1
		while end > 0:
			begin = max(0, end - self.block_size)
			self.fp.seek(begin)
			buf = self.fp.read(end - begin)
			i = buf.rfind(b"\n")
			if i >= 0:
				return begin + i + 1
			end = begin
		return 0


class AccessionResolver(object):
	"""
	resolve accessions to AccessionRecord by binary search over byte offsets of
	a text file sorted by its first (accession) column; the sort order is
	assumed, never checked

	the search halves [low, high) each step, landing on whichever line holds
	the middle byte, and gives up once high - low < convergence_threshold; with
	very uneven line lengths this may miss records near the range edges (e.g.
	the first line of the file), smaller thresholds trade extra seeks for a
	more exhaustive search

	usage:
		with AccessionResolver("acc2tax_nucl_all.txt") as resolver:
			record = resolver.find("A00001")
	"""
	def __init__(self, path: str, *,
			convergence_threshold: int = CONVERGENCE_THRESHOLD,
			block_size: int = 256):
		if convergence_threshold < 1:
			raise ValueError("convergence_threshold must be positive, got %d"
				% convergence_threshold)
		self.path = path
		self.convergence_threshold = convergence_threshold
		self.block_size = block_size
		self._file = None
		return

	@property
	def is_open(self) -> bool:
		return self._file is not None

	@property
	def size(self) -> int:
		return self._file.size

	def open(self):
		if self.is_open:
			return self
		print("Opening database file %s" % os.path.abspath(self.path),
			file=sys.stderr)
		fp = open(self.path, "rb")
		self._file = SortedTextFile(fp, block_size=self.block_size)
		print("File size: %d" % self.size, file=sys.stderr)
		return self

	def close(self):
		if self._file is not None:
			self._file.fp.close()
			self._file = None
		return

	def __enter__(self):
		return self.open()

	def __exit__(self, *ka):
		self.close()
		return

	def find(self, query: str) -> typing.Optional[AccessionRecord]:
		"""
		return the record whose accession equals query, or None
		"""
		if not self.is_open:
			raise ValueError("accession file '%s' is not open" % self.path)
		key = query.encode("utf-8")
		low, high = 0, self.size
		if high == 0:
			return None
		while True:
			mid = low + (high - low) // 2
			_, line = self._file.line_at(mid)
			record = AccessionRecord.from_line(line)
			record_key = record.key()
			if record_key == key:
				return record
			elif record_key > key:
				new_range = (low, mid)
			else:
				new_range = (mid, high)
			# stalled, the range can no longer shrink
			if new_range == (low, high):
				break
			low, high = new_range
			if high - low < self.convergence_threshold:
				break
		return None
