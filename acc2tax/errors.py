class Acc2TaxError(Exception):
	pass


class GiDomainError(Acc2TaxError, ValueError):
	"""
	a GI number falls outside the configured domain [1, max_gi)
	"""
	def __init__(self, gi: int, max_gi: int):
		super().__init__("GI out of range - %d (max GI entries: %d)"
			% (gi, max_gi))
		self.gi = gi
		self.max_gi = max_gi
		return


class LineageDepthError(Acc2TaxError):
	"""
	walking up the parent chain did not reach the root within the depth guard,
	most likely a cycle in the reference data
	"""
	def __init__(self, taxid: int, max_depth: int):
		super().__init__("lineage of node %d exceeds %d hops, nodes table may "
			"contain a cycle" % (taxid, max_depth))
		self.taxid = taxid
		self.max_depth = max_depth
		return
