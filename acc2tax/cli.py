#!/usr/bin/env python3

import argparse
import sys

from . import __version__
from .accession import CONVERGENCE_THRESHOLD
from .batch import (INPUT_FORMATS, AccessionQuery, BatchDriver, GiQuery,
	process_request_file)
from .database import ReferenceDatabase
from .errors import Acc2TaxError
from .gi_index import MAX_GI
from .lineage import MAX_DEPTH, LineageBuilder
from .util import PosInt


def get_args(argv=None):
	ap = argparse.ArgumentParser(prog="acc2tax",
		description="provide batch taxonomy information for Genbank IDs (GI) "
			"or accessions")
	query = ap.add_mutually_exclusive_group()
	query.add_argument("-a", "--accession", dest="query_type",
		action="store_const", const="accession",
		help="query is accession IDs [default]")
	query.add_argument("-g", "--gi", dest="query_type",
		action="store_const", const="gi",
		help="query is Genbank IDs")
	seq = ap.add_mutually_exclusive_group()
	seq.add_argument("-n", "--nucleotide", dest="seq_type",
		action="store_const", const="nucleotide",
		help="query IDs are nucleotide [default]")
	seq.add_argument("-p", "--protein", dest="seq_type",
		action="store_const", const="protein",
		help="query IDs are protein")
	ap.add_argument("-d", "--database", type=str, required=True,
		metavar="dir",
		help="directory containing NCBI taxonomy files (required)")
	ap.add_argument("-i", "--input", type=str, required=True,
		metavar="file",
		help="file of IDs (GI or accession), one per line; '-' for stdin "
			"(required)")
	ap.add_argument("-o", "--output", type=str, required=True,
		metavar="tsv",
		help="output file; '-' for stdout (required)")
	ap.add_argument("-e", "--entries", type=PosInt, default=MAX_GI,
		metavar="int",
		help="max GI entries, GI numbers must be below this [%d]" % MAX_GI)
	ap.add_argument("--input-format", type=str, default="txt",
		choices=sorted(INPUT_FORMATS),
		help="format of the input file; with 'fasta' the IDs are taken from "
			"the sequence headers [txt]")
	ap.add_argument("--max-depth", type=PosInt, default=MAX_DEPTH,
		metavar="int",
		help="max number of ancestors walked before a lineage is regarded as "
			"broken [%d]" % MAX_DEPTH)
	ap.add_argument("--convergence-threshold", type=PosInt,
		default=CONVERGENCE_THRESHOLD, metavar="int",
		help="accession search gives up once the remaining byte range is "
			"narrower than this [%d]" % CONVERGENCE_THRESHOLD)
	ap.add_argument("--version", action="version",
		version="%(prog)s " + __version__)
	# parse and refine args
	args = ap.parse_args(argv)
	if args.query_type is None:
		args.query_type = "accession"
	if args.seq_type is None:
		args.seq_type = "nucleotide"
	if args.input == "-":
		args.input = sys.stdin
	if args.output == "-":
		args.output = sys.stdout
	return args


def run(args):
	db = ReferenceDatabase(args.database, seq_type=args.seq_type)
	if args.query_type == "gi":
		print("Allocating GI list (max %d entries)" % args.entries,
			file=sys.stderr)
		gi_index = db.load_gi_index(max_gi=args.entries)
		query = GiQuery(gi_index)
		memory_required = gi_index.memory_required
		resolver = None
	else:
		resolver = db.accession_resolver(
			convergence_threshold=args.convergence_threshold)
		resolver.open()
		query = AccessionQuery(resolver)
		memory_required = 0
	try:
		store = db.load_taxonomy()
		memory_required += store.memory_required
		print("Memory required: %d MB\n" % (memory_required // (1024 * 1024)),
			file=sys.stderr)
		lineage = LineageBuilder(store, max_depth=args.max_depth)
		driver = BatchDriver(query, lineage)
		stats = process_request_file(args.input, args.output, driver,
			input_format=args.input_format)
	finally:
		if resolver is not None:
			resolver.close()
	return stats


def main(argv=None):
	args = get_args(argv)
	print("\nacc2tax %s\n" % __version__, file=sys.stderr)
	try:
		run(args)
	except (Acc2TaxError, OSError) as e:
		print("error: %s" % e, file=sys.stderr)
		sys.exit(1)
	return


if __name__ == "__main__":
	main()
