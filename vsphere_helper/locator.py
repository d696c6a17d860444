"""
Finding managed objects

Two ways to find a VM:
 - exhaustive: walk every VM folder below the root folder, matching on
   name or MOID. Cost grows with the whole inventory.
 - scoped: go straight to a cluster, then one of its resource pools, then
   the pool's VMs. Callers that know the cluster and pool should use this.
"""
import logging

from . import moref as mo
from .errors import ObjectNotFound

log = logging.getLogger(__name__)


def get_obj(session, vimtype, name, return_all=False):
    """Get the vsphere object associated with a given text name or MOID"""
    obj = list()
    content = session.content
    container = content.viewManager.CreateContainerView(
        content.rootFolder, vimtype, True)

    try:
        for c in container.view:
            if name in [c.name, mo.moid_of(c)]:
                if return_all is False:
                    return c
                obj.append(c)
    finally:
        container.Destroy()

    if obj:
        return obj
    return None


def iter_datacenters(folder):
    for entity in folder.childEntity:
        kind = mo.kind_of(entity)
        if kind == mo.DATACENTER:
            yield entity
        elif kind == mo.FOLDER:
            for dc in iter_datacenters(entity):
                yield dc


def iter_vms(folder):
    """Every VM below a VM folder, descending into folders and vApps"""
    for entity in folder.childEntity:
        kind = mo.kind_of(entity)
        if kind == mo.VIRTUAL_MACHINE:
            yield entity
        elif kind == mo.FOLDER:
            for vm in iter_vms(entity):
                yield vm
        elif kind == mo.VAPP:
            for vm in entity.vm:
                yield vm


def iter_all_vms(session):
    for dc in iter_datacenters(session.root_folder):
        for vm in iter_vms(dc.vmFolder):
            yield vm


def find_vm(session, name=None, moid=None):
    """Exhaustive lookup by name or MOID; None when there is no such VM"""
    for vm in iter_all_vms(session):
        if moid is not None and mo.moid_of(vm) == moid:
            return vm
        if name is not None and vm.name == name:
            return vm
    return None


def iter_compute_resources(folder):
    for entity in folder.childEntity:
        kind = mo.kind_of(entity)
        if kind in (mo.CLUSTER, mo.COMPUTE_RESOURCE):
            yield entity
        elif kind == mo.FOLDER:
            for cr in iter_compute_resources(entity):
                yield cr


def find_cluster(session, name_or_id):
    for dc in iter_datacenters(session.root_folder):
        for cluster in iter_compute_resources(dc.hostFolder):
            if name_or_id in (mo.moid_of(cluster), cluster.name):
                return cluster
    return None


def iter_pools(pool):
    yield pool
    for child in pool.resourcePool:
        for p in iter_pools(child):
            yield p


def find_pool(cluster, name_or_id):
    """The cluster's default pool or one nested below it"""
    for pool in iter_pools(cluster.resourcePool):
        if name_or_id in (mo.moid_of(pool), pool.name):
            return pool
    return None


def find_vm_in_pool(session, vmid, cluster_id, pool_id):
    """Scoped lookup: cluster, then resource pool, then the pool's VMs"""
    cluster = find_cluster(session, cluster_id)
    if cluster is None:
        raise ObjectNotFound('Cluster', cluster_id)

    pool = find_pool(cluster, pool_id)
    if pool is None:
        raise ObjectNotFound('Resource pool', pool_id)

    for vm in pool.vm:
        if mo.moid_of(vm) == vmid:
            return vm
    return None


def get_vm_failfast(session, name=None, moid=None, cluster=None, pool=None,
                    vm_term='VM'):
    """
    Get a VirtualMachine object
    fail fast if the object isn't a valid reference
    """
    wanted = moid if moid is not None else name
    log.debug("Finding VirtualMachine %s...", wanted)

    if moid is not None and cluster and pool:
        vm = find_vm_in_pool(session, moid, cluster, pool)
    else:
        vm = find_vm(session, name=name, moid=moid)

    if vm is None:
        raise ObjectNotFound(vm_term, wanted)

    log.debug("Found VirtualMachine: %s Name: %s", mo.moref(vm), vm.name)
    return vm
