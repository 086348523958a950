import pytest

from acc2tax.taxonomy import NCBITaxonomyNode, TaxonomyStore


def test_parent_links(store):
	"""Should map each node to its parent"""
	assert store.parent_of(562) == 1236
	assert store.parent_of(2) == 131567
	assert store.parent_of(1) == 1


def test_unknown_node_has_no_parent(store):
	"""Should return None for tax ids absent from nodes.dmp"""
	assert store.parent_of(4242) is None
	assert store.parent_of(10 ** 7) is None
	assert 4242 not in store
	assert 562 in store


def test_only_scientific_names_are_kept(store):
	"""Should ignore synonyms and common names"""
	assert store.name_of(2) == "Bacteria"
	assert store.name_of(562) == "Escherichia coli"


def test_missing_name(store):
	"""Should return None for nodes without a scientific name"""
	assert store.name_of(9999) is None
	assert store.name_of(10 ** 7) is None


def test_last_scientific_name_wins(tmp_path):
	"""Should keep the last scientific name when a tax id has several"""
	(tmp_path / "nodes.dmp").write_text("1\t|\t1\t|\tno rank\t|\n")
	(tmp_path / "names.dmp").write_text(
		"7\t|\tFirst\t|\t\t|\tscientific name\t|\n"
		"7\t|\tSecond\t|\t\t|\tscientific name\t|\n")
	store = TaxonomyStore.load(str(tmp_path / "nodes.dmp"),
		str(tmp_path / "names.dmp"))
	assert store.name_of(7) == "Second"
	assert store.n_names == 1


def test_plain_tab_layout(tmp_path):
	"""Should read plain tab-separated files (child, rank, parent)"""
	(tmp_path / "nodes.dmp").write_text("1\tno rank\t1\n2\tsuperkingdom\t1\n")
	(tmp_path / "names.dmp").write_text("2\tBacteria\t\tscientific name\n")
	store = TaxonomyStore.load(str(tmp_path / "nodes.dmp"),
		str(tmp_path / "names.dmp"))
	assert store.parent_of(2) == 1
	assert store.name_of(2) == "Bacteria"


def test_malformed_lines_are_skipped(tmp_path, capsys):
	"""Should report and skip lines with missing or non-numeric fields"""
	(tmp_path / "nodes.dmp").write_text(
		"1\t|\t1\t|\tno rank\t|\n"
		"3\n"
		"x\t|\t1\t|\tno rank\t|\n"
		"2\t|\t1\t|\tsuperkingdom\t|\n")
	(tmp_path / "names.dmp").write_text(
		"2\t|\tBacteria\n"
		"2\t|\tBacteria\t|\t\t|\tscientific name\t|\n")
	store = TaxonomyStore.load(str(tmp_path / "nodes.dmp"),
		str(tmp_path / "names.dmp"))
	err = capsys.readouterr().err
	assert err.count("bad line in nodes file") == 2
	assert err.count("bad line in names file") == 1
	assert store.n_nodes == 2
	assert store.parent_of(2) == 1
	assert store.name_of(2) == "Bacteria"


def test_unreadable_file_is_fatal(tmp_path):
	"""Should raise when a dump file cannot be opened"""
	(tmp_path / "names.dmp").write_text("")
	with pytest.raises(FileNotFoundError):
		TaxonomyStore.load(str(tmp_path / "nodes.dmp"),
			str(tmp_path / "names.dmp"))


def test_node_record_rejects_negative_ids():
	"""Should treat negative tax ids as bad format"""
	with pytest.raises(ValueError):
		NCBITaxonomyNode.from_dumped_line("-2\t|\t1\t|\tno rank\t|\n")


def test_oversized_ids_are_skipped(tmp_path, capsys):
	"""Should report and skip lines whose ids do not fit the uint32 tables"""
	(tmp_path / "nodes.dmp").write_text(
		"1\t|\t1\t|\tno rank\t|\n"
		"2\t|\t4294967296\t|\tno rank\t|\n"
		"4294967296\t|\t1\t|\tno rank\t|\n"
		"3\t|\t1\t|\tno rank\t|\n")
	(tmp_path / "names.dmp").write_text(
		"99999999999\t|\tHuge\t|\t\t|\tscientific name\t|\n"
		"3\t|\tSmall\t|\t\t|\tscientific name\t|\n")
	store = TaxonomyStore.load(str(tmp_path / "nodes.dmp"),
		str(tmp_path / "names.dmp"))
	err = capsys.readouterr().err
	assert err.count("bad line in nodes file") == 2
	assert err.count("bad line in names file") == 1
	assert store.n_nodes == 2
	assert store.parent_of(2) is None
	assert store.parent_of(3) == 1
	assert store.name_of(3) == "Small"
	assert store.n_names == 1
