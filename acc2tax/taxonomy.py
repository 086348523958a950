import os
import sys
import typing

from .util import MAX_ID, DenseArray, NCBIDumpFormat, Struct, get_fp


def _check_tax_id(s: str):
	if not (0 <= int(s) <= MAX_ID):
		raise ValueError("tax id must be within [0, %d], got %s"
			% (MAX_ID, s))
	return


class NCBITaxonomyNode(Struct, NCBIDumpFormat):
	"""
	a nodes.dmp record, only the node's own tax id and the parent tax id are
	used; in the dump layout the parent is the 2nd field, in the plain
	tab-separated layout (child, rank, parent) it is the 3rd
	"""
	tax_id = Struct.field(0, type_cast=int)

	parent_index = 1

	@property
	def parent_tax_id(self) -> int:
		return int(self[self.parent_index])

	@classmethod
	def from_dumped_line(cls, raw_line):
		fields = cls.split_line(raw_line)
		parent_index = 1 if cls.is_dump_line(raw_line) else 2
		if len(fields) <= parent_index:
			raise ValueError("bad format: " + str(fields))
		_check_tax_id(fields[0])
		_check_tax_id(fields[parent_index])
		new = cls(fields)
		new.parent_index = parent_index
		return new


class NCBITaxonomyNodeName(Struct, NCBIDumpFormat):
	"""
	name field definition please refer to:
	ftp://ftp.ncbi.nih.gov/pub/taxonomy/taxdump.tar.gz/readme.txt
	"""
	tax_id = Struct.field(0, type_cast=int)
	name_txt = Struct.field(1)
	unique_name = Struct.field(2)
	name_class = Struct.field(3)

	def __init__(self, fields):
		if len(fields) < 4:
			raise ValueError("bad format: " + str(fields))
		super().__init__(fields)
		return

	@classmethod
	def from_dumped_line(cls, raw_line):
		new = cls(cls.split_line(raw_line))
		_check_tax_id(new[0])
		return new

	@property
	def is_scientific_name(self):
		return self.name_class == "scientific name"


class TaxonomyStore(object):
	"""
	parent links and scientific names of all taxa, indexed by tax id

	ARGUMENTS
	capacity:
	  initial number of tax id slots; tables grow past it on demand
	"""
	def __init__(self, capacity: int = 1024):
		self._parents = DenseArray(capacity)
		self._names = list()
		self.n_nodes = 0
		self.n_names = 0
		return

	def add_node(self, tax_id: int, parent_tax_id: int):
		self._parents[tax_id] = parent_tax_id
		self.n_nodes += 1
		return

	def set_name(self, tax_id: int, name: str):
		if tax_id < 0:
			raise ValueError("tax id must be non-negative, got %d" % tax_id)
		if tax_id >= len(self._names):
			self._names.extend([None] * (tax_id + 1 - len(self._names)))
		# later scientific names replace earlier ones
		if self._names[tax_id] is None:
			self.n_names += 1
		self._names[tax_id] = name
		return

	def parent_of(self, tax_id: int) -> typing.Optional[int]:
		parent = self._parents.get(tax_id)
		return parent or None

	def name_of(self, tax_id: int) -> typing.Optional[str]:
		if (tax_id < 0) or (tax_id >= len(self._names)):
			return None
		return self._names[tax_id]

	def __contains__(self, tax_id: int) -> bool:
		return self.parent_of(tax_id) is not None

	@property
	def memory_required(self) -> int:
		return self._parents.nbytes \
			+ sum(len(i) + 1 for i in self._names if i is not None)

	############################################################################
	# database I/O: from dump files
	@classmethod
	def load(cls, nodes_dump, names_dump, *, capacity: int = 1024):
		"""
		load the store from .dmp files; unreadable files raise OSError,
		malformed lines are reported and skipped

		ARGUMENTS:
		nodes_dump:
		  path to the nodes.dmp file
		names_dump:
		  path to the names.dmp file
		"""
		store = cls(capacity=capacity)
		store.load_nodes(nodes_dump)
		store.load_names(names_dump)
		return store

	def load_nodes(self, nodes_dump):
		if isinstance(nodes_dump, str):
			print("Opening database file %s" % os.path.abspath(nodes_dump),
				file=sys.stderr)
		with get_fp(nodes_dump, "r") as fp:
			for line in fp:
				if not line.strip():
					continue
				try:
					node = NCBITaxonomyNode.from_dumped_line(line)
				except ValueError:
					print("Error: bad line in nodes file: %s" % line.rstrip(),
						file=sys.stderr)
					continue
				self.add_node(node.tax_id, node.parent_tax_id)
		print("loaded %d nodes" % self.n_nodes, file=sys.stderr)
		return

	def load_names(self, names_dump):
		if isinstance(names_dump, str):
			print("Opening database file %s" % os.path.abspath(names_dump),
				file=sys.stderr)
		with get_fp(names_dump, "r") as fp:
			for line in fp:
				if not line.strip():
					continue
				try:
					name_obj = NCBITaxonomyNodeName.from_dumped_line(line)
				except ValueError:
					print("Error: bad line in names file: %s" % line.rstrip(),
						file=sys.stderr)
					continue
				if name_obj.is_scientific_name:
					self.set_name(name_obj.tax_id, name_obj.name_txt)
		print("loaded %d scientific names" % self.n_names, file=sys.stderr)
		return
