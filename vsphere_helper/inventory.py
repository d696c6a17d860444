"""
Inventory walk

Builds one nested mapping of the vCenter inventory keyed by object labels
(see moref.label):

    Folder-group-d1
        Datacenter-datacenter-2
            Folder-group-h4
                ClusterComputeResource-domain-c7
                    ResourcePool-resgroup-8
                        ResourcePool-resgroup-21
                    Datastore-datastore-11
                    Network-network-13
    ServiceContent
        CustomizationSpecManager-CustomizationSpecManager
            <spec name>: <spec type>

Every node also carries its 'moid' and 'name'. The managed object tree is
acyclic by construction, so there is no visited set; folder recursion is
bounded by MAX_DEPTH instead.
"""
import json
import logging
import sys

import yaml

from . import moref as mo
from .errors import InventoryTooDeep

log = logging.getLogger(__name__)

MAX_DEPTH = 32

SERVICE_CONTENT = 'ServiceContent'


def node(obj):
    return {'moid': mo.moid_of(obj), 'name': obj.name}


def record(parent, obj):
    """Add obj under parent and return its (new) node"""
    child = node(obj)
    parent[mo.moref(obj).label] = child
    return child


def check_depth(depth):
    if depth > MAX_DEPTH:
        raise InventoryTooDeep(
            "Folder nesting deeper than %d levels" % MAX_DEPTH)


def walk_children(parent, entities, dispatch, depth):
    for entity in entities:
        walker = dispatch.get(mo.kind_of(entity))
        if walker is None:
            log.debug("Skipping %s", mo.moref(entity))
            continue
        walker(parent, entity, depth)


def walk_root_folder(parent, folder, depth):
    check_depth(depth)
    here = record(parent, folder)
    walk_children(here, folder.childEntity, ROOT_DISPATCH, depth + 1)


def walk_datacenter(parent, datacenter, depth):
    here = record(parent, datacenter)
    walk_host_folder(here, datacenter.hostFolder, depth + 1)


def walk_host_folder(parent, folder, depth):
    check_depth(depth)
    here = record(parent, folder)
    walk_children(here, folder.childEntity, HOST_DISPATCH, depth + 1)


def walk_cluster(parent, cluster, depth):
    here = record(parent, cluster)

    default_pool = cluster.resourcePool
    pool_node = record(here, default_pool)
    for pool in default_pool.resourcePool:
        record(pool_node, pool)

    for datastore in cluster.datastore:
        record(here, datastore)

    for network in cluster.network:
        record(here, network)


ROOT_DISPATCH = {
    mo.FOLDER: walk_root_folder,
    mo.DATACENTER: walk_datacenter,
}

HOST_DISPATCH = {
    mo.FOLDER: walk_host_folder,
    mo.CLUSTER: walk_cluster,
    mo.COMPUTE_RESOURCE: walk_cluster,
}


def customization_catalog(content):
    manager = content.customizationSpecManager
    catalog = {}
    for info in manager.info:
        catalog[info.name] = info.type
    return {mo.moref(manager).label: catalog}


def walk_inventory(session):
    """Whole inventory as a nested dict; raises on any remote failure"""
    content = session.content
    hierarchy = {}
    walk_root_folder(hierarchy, content.rootFolder, 0)
    hierarchy[SERVICE_CONTENT] = customization_catalog(content)
    return hierarchy


def serialize(hierarchy, fmt='json'):
    if fmt == 'yaml':
        return yaml.safe_dump(hierarchy, default_flow_style=False,
                              sort_keys=False)
    return json.dumps(hierarchy, indent=2) + "\n"


def dump_inventory(session, path=None, fmt='json'):
    """
    Walk the inventory and write it pretty-printed to path, or to stdout
    when path is None or '-'. Nothing is written if the walk fails.
    """
    text = serialize(walk_inventory(session), fmt)

    if path in (None, '-'):
        sys.stdout.write(text)
    else:
        with open(path, 'w') as fh:
            fh.write(text)
        log.info("Wrote inventory to %s", path)
    return text
