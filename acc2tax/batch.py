import Bio.SeqIO
import dataclasses
import sys
import typing

from .accession import AccessionResolver
from .errors import LineageDepthError
from .gi_index import GiIndex
from .lineage import LineageBuilder
from .util import chomp, get_fp, parse_int


@dataclasses.dataclass
class BatchStats(object):
	processed: int = 0
	written: int = 0
	skipped: int = 0


class GiQuery(object):
	"""
	numeric GI identifiers; unresolvable GIs are reported and skipped
	"""
	def __init__(self, gi_index: GiIndex):
		self.gi_index = gi_index
		return

	def resolve(self, identifier: str) -> typing.Optional[int]:
		gi = parse_int(identifier)
		if (gi is None) or (gi < 1):
			print("\nError: bad GI (%s) in request file" % identifier,
				file=sys.stderr)
			return None
		if not self.gi_index.in_domain(gi):
			print("\nError: bad GI (%d), max GI entries is %d"
				% (gi, self.gi_index.max_gi), file=sys.stderr)
			return None
		tax_id = self.gi_index.taxon_of(gi)
		if tax_id is None:
			print("\nError: GI (%d) node (0) invalid" % gi, file=sys.stderr)
		return tax_id


class AccessionQuery(object):
	"""
	accession identifiers; accessions missing from the reference file are
	reported and skipped, but a record carrying tax id 0 resolves to 0 and is
	written out as 'Unknown'
	"""
	def __init__(self, resolver: AccessionResolver):
		self.resolver = resolver
		return

	def resolve(self, identifier: str) -> typing.Optional[int]:
		record = self.resolver.find(identifier)
		if record is None:
			print("\nCouldn't find: [%s]" % identifier, file=sys.stderr)
			return None
		return record.taxid


def iter_txt_identifiers(fp):
	for line in fp:
		yield chomp(line)
	return


def iter_fasta_identifiers(fp):
	for seq in Bio.SeqIO.parse(fp, format="fasta"):
		yield seq.id
	return


INPUT_FORMATS = {
	"txt": iter_txt_identifiers,
	"fasta": iter_fasta_identifiers,
}


class BatchDriver(object):
	"""
	resolve identifiers one by one and write '<id>\\t<lineage>' rows, in input
	order, for those that resolve

	ARGUMENTS
	query:
	  GiQuery or AccessionQuery, anything with resolve(identifier) -> tax id
	lineage:
	  LineageBuilder used to render the resolved tax ids
	progress_interval:
	  print a progress mark every this many identifiers; 0 to disable
	"""
	def __init__(self, query, lineage: LineageBuilder, *,
			progress_interval: int = 100):
		self.query = query
		self.lineage = lineage
		self.progress_interval = progress_interval
		return

	def resolve_line(self, identifier: str) -> typing.Optional[str]:
		"""
		output row for one identifier, None if it is to be skipped
		"""
		if not identifier:
			print("\nError: empty ID in request file", file=sys.stderr)
			return None
		tax_id = self.query.resolve(identifier)
		if tax_id is None:
			return None
		try:
			lineage = self.lineage.render(tax_id)
		except LineageDepthError as e:
			print("\nError: %s (ID %s skipped)" % (e, identifier),
				file=sys.stderr)
			return None
		return "%s\t%s" % (identifier, lineage)

	def run(self, identifiers, ofp) -> BatchStats:
		stats = BatchStats()
		for identifier in identifiers:
			stats.processed += 1
			if self.progress_interval \
					and (stats.processed % self.progress_interval == 0):
				print(".", end="", file=sys.stderr, flush=True)
			row = self.resolve_line(identifier)
			if row is None:
				stats.skipped += 1
				continue
			print(row, file=ofp)
			stats.written += 1
		print("\n\nDone. Processed %d IDs." % stats.processed, file=sys.stderr)
		return stats


def process_request_file(ifile, ofile, driver: BatchDriver, *,
		input_format: str = "txt") -> BatchStats:
	if input_format not in INPUT_FORMATS:
		raise ValueError("unaccepted input format '%s'" % input_format)
	reader = INPUT_FORMATS[input_format]
	with get_fp(ifile, "r") as ifp:
		with get_fp(ofile, "w") as ofp:
			stats = driver.run(reader(ifp), ofp)
	return stats
