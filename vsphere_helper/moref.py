"""Managed object references and inventory labels"""
from collections import namedtuple


# object kinds the walker and the locator know how to descend into
FOLDER = 'Folder'
DATACENTER = 'Datacenter'
CLUSTER = 'ClusterComputeResource'
COMPUTE_RESOURCE = 'ComputeResource'
VAPP = 'VirtualApp'
VIRTUAL_MACHINE = 'VirtualMachine'
DV_PORTGROUP = 'DistributedVirtualPortgroup'


def label(kind, moid):
    """Inventory label for a (kind, moid) pair, e.g. Folder-group-d1"""
    return "%s-%s" % (kind, moid)


class MoRef(namedtuple('MoRef', ['kind', 'moid'])):
    __slots__ = ()

    @property
    def label(self):
        return label(self.kind, self.moid)

    def __str__(self):
        return self.label


def moref(obj):
    """(kind, moid) of a pyVmomi managed object"""
    return MoRef(obj._wsdlName, obj._moId)


def kind_of(obj):
    return obj._wsdlName


def moid_of(obj):
    return obj._moId
