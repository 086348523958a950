import pytest

from acc2tax.taxonomy import TaxonomyStore


NODES_DMP = "".join("\t|\t".join(fields) + "\t|\n" for fields in [
	("1", "1", "no rank", "", "8"),
	("131567", "1", "no rank", "", "8"),
	("2", "131567", "superkingdom", "", "0"),
	("1224", "2", "phylum", "", "0"),
	("1236", "1224", "class", "", "0"),
	("562", "1236", "species", "EC", "0"),
	("9999", "1236", "species", "", "0"),
	# broken data: 50 and 51 are each other's parent
	("50", "51", "no rank", "", "0"),
	("51", "50", "no rank", "", "0"),
])

NAMES_DMP = "".join("\t|\t".join(fields) + "\t|\n" for fields in [
	("1", "root", "", "scientific name"),
	("131567", "cellular organisms", "", "scientific name"),
	("2", "Bacteria", "Bacteria <bacteria>", "scientific name"),
	("2", "eubacteria", "", "genbank common name"),
	("1224", "Proteobacteria", "", "scientific name"),
	("1236", "Gammaproteobacteria", "", "scientific name"),
	("562", "Escherichia coli", "", "scientific name"),
	("562", "Bacillus coli", "", "synonym"),
	("50", "Loop A", "", "scientific name"),
	("51", "Loop B", "", "scientific name"),
])

GI_TAXID_NUCL_DMP = "5\t562\n9\t1224\n"

# line lengths 17, 15, 18 and 18 bytes
ACC2TAX_NUCL_ALL = (
	b"A0001\t1\t562\t1001\n"
	b"A0005\t1\t0\t1005\n"
	b"A0009\t2\t1224\t1009\n"
	b"A0012\t1\t9999\t1012\n"
)

@pytest.fixture
def taxdump_dir(tmp_path):
	"""Provide a reference database directory with nucleotide files."""
	(tmp_path / "nodes.dmp").write_text(NODES_DMP)
	(tmp_path / "names.dmp").write_text(NAMES_DMP)
	(tmp_path / "gi_taxid_nucl.dmp").write_text(GI_TAXID_NUCL_DMP)
	(tmp_path / "acc2tax_nucl_all.txt").write_bytes(ACC2TAX_NUCL_ALL)
	return tmp_path


@pytest.fixture
def store(taxdump_dir):
	"""Provide a TaxonomyStore loaded from the fixture database."""
	return TaxonomyStore.load(str(taxdump_dir / "nodes.dmp"),
		str(taxdump_dir / "names.dmp"))
