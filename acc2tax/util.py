import io
import numpy


# largest id or tax id the uint32 tables can hold
MAX_ID = int(numpy.iinfo(numpy.uint32).max)


class PosInt(int):
	def __new__(cls, *ka, **kw):
		self = super().__new__(cls, *ka, **kw)
		if self <= 0:
			raise ValueError("%s must be positive, got %d"
				% (cls.__name__, self))
		return self


def get_fp(f, *ka, factory=open, **kw):
	if isinstance(f, io.IOBase):
		ret = f
	elif isinstance(f, str):
		ret = factory(f, *ka, **kw)
	else:
		raise TypeError("first arg of get_fp() must be io.IOBase or str, "
			"got '%s'" % type(f).__name__)
	return ret


def chomp(s: str) -> str:
	"""
	strip trailing whitespace and control characters (anything <= ' ')
	"""
	end = len(s)
	while end and (s[end - 1] <= " "):
		end -= 1
	return s[:end]


def parse_int(s, default=None):
	"""
	parse s as an integer, return default when s is missing or not a number
	"""
	if s is None:
		return default
	try:
		return int(s)
	except ValueError:
		return default


class Struct(list):
	"""
	list wrapped as struct, use attribute name to access data as well as index
	"""
	class field(property):
		def __init__(self, index, type_cast=str, default=None, doc=None):
			def fget(self):
				if index >= len(self):
					return default
				return type_cast(self[index])
			super().__init__(doc=doc, fget=fget)
			return


class NCBIDumpFormat(object):
	"""
	handles the NCBI taxonomy database dmp file format:
	delimiter: \\t|\\t
	EOL: \\t|\\n

	lines that do not carry the dump delimiter are treated as plain
	tab-separated records
	"""
	DELIMITER = "\t|\t"
	EOL = "\t|"

	@classmethod
	def is_dump_line(cls, raw_line: str) -> bool:
		return cls.EOL in raw_line

	@classmethod
	def split_line(cls, raw_line: str) -> list:
		line = raw_line.rstrip("\r\n")
		if cls.is_dump_line(line):
			if line.endswith(cls.EOL):
				line = line[:-len(cls.EOL)]
			return line.split(cls.DELIMITER)
		return line.split("\t")


class DenseArray(object):
	"""
	integer array indexed directly by a non-negative id, backed by numpy and
	grown on demand; positions never written read as 0

	ARGUMENTS
	capacity:
	  initial number of slots allocated
	dtype:
	  numpy dtype of stored values
	"""
	def __init__(self, capacity: int = 1024, dtype=numpy.uint32):
		if capacity < 1:
			raise ValueError("capacity must be positive, got %d" % capacity)
		self._data = numpy.zeros(capacity, dtype=dtype)
		self._size = 0
		return

	def __len__(self) -> int:
		return self._size

	def __getitem__(self, index: int) -> int:
		return self.get(index)

	def __setitem__(self, index: int, value: int):
		if index < 0:
			raise IndexError("index must be non-negative, got %d" % index)
		if index >= len(self._data):
			self._grow(index + 1)
		self._data[index] = value
		if index >= self._size:
			self._size = index + 1
		return

	def get(self, index: int, default: int = 0) -> int:
		if (index < 0) or (index >= self._size):
			return default
		return int(self._data[index])

	@property
	def capacity(self) -> int:
		return len(self._data)

	@property
	def nbytes(self) -> int:
		return self._data.nbytes

	def _grow(self, min_capacity: int):
		new_capacity = len(self._data)
		while new_capacity < min_capacity:
			new_capacity *= 2
		data = numpy.zeros(new_capacity, dtype=self._data.dtype)
		data[:len(self._data)] = self._data
		self._data = data
		return
