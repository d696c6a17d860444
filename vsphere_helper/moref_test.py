import unittest

from pyVmomi import vim

from vsphere_helper import moref
from vsphere_helper.fake_vim import FakeManagedObject


class TestLabel(unittest.TestCase):

    def test_label(self):
        self.assertEqual('VirtualMachine-vm-101',
                         moref.label('VirtualMachine', 'vm-101'))
        self.assertEqual('Folder-group-d1', moref.label('Folder', 'group-d1'))

    def test_label_is_stable(self):
        first = moref.label('Datastore', 'datastore-11')
        second = moref.label('Datastore', 'datastore-11')
        self.assertEqual(first, second)

    def test_label_differs_for_differing_pairs(self):
        pairs = [('VirtualMachine', 'vm-101'),
                 ('VirtualMachine', 'vm-102'),
                 ('Folder', 'vm-101'),
                 ('ResourcePool', 'resgroup-8'),
                 ('ResourcePool', 'resgroup-81')]
        labels = set(moref.label(k, i) for k, i in pairs)
        self.assertEqual(len(pairs), len(labels))


class TestMoRef(unittest.TestCase):

    def test_from_pyvmomi_object(self):
        ref = moref.moref(vim.Folder('group-d1'))
        self.assertEqual(('Folder', 'group-d1'), ref)
        self.assertEqual('Folder-group-d1', ref.label)

    def test_from_fake_object(self):
        vm = FakeManagedObject('VirtualMachine', 'vm-101', 'template01')
        ref = moref.moref(vm)
        self.assertEqual(moref.MoRef('VirtualMachine', 'vm-101'), ref)
        self.assertEqual('VirtualMachine-vm-101', str(ref))

    def test_equality_is_kind_and_moid(self):
        self.assertEqual(moref.MoRef('Datastore', 'datastore-11'),
                         moref.MoRef('Datastore', 'datastore-11'))
        self.assertNotEqual(moref.MoRef('Datastore', 'datastore-11'),
                            moref.MoRef('Network', 'datastore-11'))


if __name__ == '__main__':
    unittest.main()
