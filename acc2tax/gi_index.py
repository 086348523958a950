import os
import sys
import typing

from .errors import GiDomainError
from .util import MAX_ID, DenseArray, get_fp, parse_int


# default upper bound (exclusive) of GI numbers accepted by the index
MAX_GI = 1050000000


class GiIndex(object):
	"""
	GI number -> tax id map over the domain [1, max_gi); tax id 0 means the
	GI is unmapped

	ARGUMENTS
	max_gi:
	  exclusive upper bound of accepted GI numbers
	capacity:
	  initial number of allocated slots; grows on demand up to max_gi
	"""
	def __init__(self, max_gi: int = MAX_GI, capacity: int = 1024):
		if max_gi < 1:
			raise ValueError("max_gi must be positive, got %d" % max_gi)
		self.max_gi = max_gi
		self._taxids = DenseArray(min(capacity, max_gi))
		self.n_records = 0
		return

	def in_domain(self, gi: int) -> bool:
		return 1 <= gi < self.max_gi

	def add_record(self, gi: int, tax_id: int):
		if gi >= self.max_gi:
			raise GiDomainError(gi, self.max_gi)
		self._taxids[gi] = tax_id
		self.n_records += 1
		return

	def taxon_of(self, gi: int) -> typing.Optional[int]:
		"""
		tax id mapped to gi, or None when gi is unmapped or out of domain
		"""
		if not self.in_domain(gi):
			return None
		return self._taxids.get(gi) or None

	def lookup(self, gi: int) -> typing.Optional[int]:
		"""
		as taxon_of(), but an out-of-domain gi raises GiDomainError instead of
		reading as unmapped
		"""
		if not self.in_domain(gi):
			raise GiDomainError(gi, self.max_gi)
		return self._taxids.get(gi) or None

	@property
	def memory_required(self) -> int:
		return self._taxids.nbytes

	@classmethod
	def load(cls, gi_taxid_dump, max_gi: int = MAX_GI, **kw):
		"""
		load the index from a gi_taxid_{nucl,prot}.dmp file; a GI beyond
		max_gi means the domain bound was set too low and aborts the load with
		GiDomainError
		"""
		new = cls(max_gi=max_gi, **kw)
		if isinstance(gi_taxid_dump, str):
			print("Opening database file %s" % os.path.abspath(gi_taxid_dump),
				file=sys.stderr)
		with get_fp(gi_taxid_dump, "r") as fp:
			for line in fp:
				fields = line.split()
				if not fields:
					continue
				gi = parse_int(fields[0]) if len(fields) >= 2 else None
				tax_id = parse_int(fields[1]) if len(fields) >= 2 else None
				if (gi is None) or (tax_id is None) or (gi < 0) or (tax_id < 0) \
						or (tax_id > MAX_ID):
					print("Error: bad line in GI file: %s" % line.rstrip(),
						file=sys.stderr)
					continue
				new.add_record(gi, tax_id)
		print("loaded %d GI records" % new.n_records, file=sys.stderr)
		return new
