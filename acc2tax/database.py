import os

from .accession import AccessionResolver
from .gi_index import GiIndex
from .taxonomy import TaxonomyStore


SEQ_TYPES = {
	"nucleotide": "nucl",
	"protein": "prot",
}


class ReferenceDatabase(object):
	"""
	file naming convention inside a reference database directory:
	  nodes.dmp, names.dmp
	  gi_taxid_{nucl,prot}.dmp
	  acc2tax_{nucl,prot}_all.txt
	"""
	def __init__(self, directory: str, seq_type: str = "nucleotide"):
		if seq_type not in SEQ_TYPES:
			raise ValueError("seq_type must be one of %s, got '%s'"
				% (sorted(SEQ_TYPES), seq_type))
		self.directory = directory
		self.seq_type = seq_type
		return

	@property
	def suffix(self) -> str:
		return SEQ_TYPES[self.seq_type]

	@property
	def nodes_path(self) -> str:
		return os.path.join(self.directory, "nodes.dmp")

	@property
	def names_path(self) -> str:
		return os.path.join(self.directory, "names.dmp")

	@property
	def gi_taxid_path(self) -> str:
		return os.path.join(self.directory, "gi_taxid_%s.dmp" % self.suffix)

	@property
	def accession_path(self) -> str:
		return os.path.join(self.directory, "acc2tax_%s_all.txt" % self.suffix)

	def load_taxonomy(self, **kw) -> TaxonomyStore:
		return TaxonomyStore.load(self.nodes_path, self.names_path, **kw)

	def load_gi_index(self, **kw) -> GiIndex:
		return GiIndex.load(self.gi_taxid_path, **kw)

	def accession_resolver(self, **kw) -> AccessionResolver:
		return AccessionResolver(self.accession_path, **kw)
