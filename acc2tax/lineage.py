import sys

from .errors import LineageDepthError
from .taxonomy import TaxonomyStore


ROOT_TAX_ID = 1
MAX_DEPTH = 1024
UNKNOWN = "Unknown"


class LineageBuilder(object):
	"""
	build root-to-leaf scientific name chains from a TaxonomyStore

	the root itself is not part of any lineage; the walk also stops at a
	taxon without a parent record, and raises LineageDepthError after
	max_depth hops
	"""
	def __init__(self, store: TaxonomyStore, *, root_id: int = ROOT_TAX_ID,
			max_depth: int = MAX_DEPTH, delimiter: str = ","):
		self.store = store
		self.root_id = root_id
		self.max_depth = max_depth
		self.delimiter = delimiter
		return

	def lineage_ids(self, tax_id: int) -> list:
		path = list()
		node = tax_id
		while (node is not None) and (node > self.root_id):
			if len(path) >= self.max_depth:
				raise LineageDepthError(tax_id, self.max_depth)
			path.append(node)
			node = self.store.parent_of(node)
		return path[::-1]

	def lineage_of(self, tax_id: int) -> list:
		ret = list()
		for i in self.lineage_ids(tax_id):
			name = self.store.name_of(i)
			if name is None:
				print("Error: no name for node %d" % i, file=sys.stderr)
				name = UNKNOWN
			ret.append(name)
		return ret

	def render(self, tax_id: int) -> str:
		"""
		comma-joined lineage; tax id 0 (no mapping) renders as 'Unknown'
		"""
		if tax_id == 0:
			return UNKNOWN
		return self.delimiter.join(self.lineage_of(tax_id))
