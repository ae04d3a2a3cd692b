"""
Tree manager tests.

Every mutating operation is checked against both the tree and the disk.

Version: 1.0.0
"""

import unittest

from mirrorfs.exceptions import (
    EntityNotFoundError,
    ParentNotFoundError,
    DuplicateNameError,
    EmptyNameError,
    InvalidNameError,
    RootProtectedError,
    NotAFolderError,
    NotAFileError,
    DestinationInvalidError,
    FolderInUseError,
    LineNumberOutOfRangeError,
    StorageIOError,
)
from mirrorfs.filesystem.entity import EntityType
from mirrorfs.filesystem.file import LINE_TERMINATOR
from mirrorfs.filesystem.tree_manager import TreeManager

from tests.support import TreeTestCase


class TestCreate(TreeTestCase):
    """Test file and folder creation."""

    def test_create_file_round_trip(self):
        self.tree.create_folder('a')
        self.tree.create_file('a/b.txt', "hi")

        self.assertEqual(self.tree.get('a/b.txt').content, "hi")
        self.assertEqual((self.disk / 'a' / 'b.txt').read_text(), "hi")

    def test_create_folder_on_disk(self):
        folder = self.tree.create_folder('docs')
        self.assertTrue((self.disk / 'docs').is_dir())
        self.assertIs(self.tree.root.get_child('docs'), folder)

    def test_create_absolute_from_subfolder(self):
        self.tree.create_folder('docs')
        self.tree.navigate('docs')

        file = self.tree.create_file('/top.txt')

        self.assertIs(file.parent, self.tree.root)

    def test_create_missing_parent(self):
        with self.assertRaises(ParentNotFoundError):
            self.tree.create_file('missing/a.txt')
        with self.assertRaises(ParentNotFoundError):
            self.tree.create_folder('missing/sub')

    def test_create_under_file(self):
        self.tree.create_file('a.txt')
        with self.assertRaises(ParentNotFoundError):
            self.tree.create_file('a.txt/b.txt')

    def test_create_empty_name(self):
        self.tree.create_folder('docs')
        with self.assertRaises(EmptyNameError):
            self.tree.create_file('docs/')
        with self.assertRaises(EmptyNameError):
            self.tree.create_folder('   ')

    def test_create_reserved_name(self):
        with self.assertRaises(InvalidNameError):
            self.tree.create_folder('..')

    def test_create_duplicate_ignores_case(self):
        self.tree.create_file('Notes.txt', "first")
        with self.assertRaises(DuplicateNameError):
            self.tree.create_file('notes.TXT', "second")
        with self.assertRaises(DuplicateNameError):
            self.tree.create_folder('NOTES.txt')

        self.assertEqual(self.tree.get('Notes.txt').content, "first")

    def test_create_over_stale_disk_file(self):
        (self.disk / 'stale.txt').write_text("old")

        file = self.tree.create_file('stale.txt', "new")

        self.assertEqual(file.content, "new")
        self.assertEqual((self.disk / 'stale.txt').read_text(), "new")

    def test_create_file_logs_access(self):
        file = self.tree.create_file('a.txt')
        history = self.history.get_history()
        self.assertEqual(len(history), 1)
        self.assertTrue(history[0].endswith(f"Accessed: {file.full_path()}"))


class TestDelete(TreeTestCase):
    """Test deletion."""

    def test_delete_file(self):
        self.tree.create_file('a.txt', "x")
        self.tree.delete('a.txt')

        self.assertIsNone(self.tree.resolve('a.txt'))
        self.assertFalse((self.disk / 'a.txt').exists())

    def test_delete_folder_recursive(self):
        self.tree.create_folder('a')
        self.tree.create_folder('a/b')
        inner = self.tree.create_file('a/b/c.txt', "x")

        self.tree.delete('/a')

        self.assertFalse((self.disk / 'a').exists())
        self.assertNotIn(inner, self.tree.table)
        self.assertEqual(len(self.tree.table), 1)

    def test_delete_root_rejected(self):
        with self.assertRaises(RootProtectedError):
            self.tree.delete('/')
        self.assertIs(self.tree.resolve('/'), self.tree.root)
        self.assertTrue(self.disk.is_dir())

    def test_delete_missing(self):
        with self.assertRaises(EntityNotFoundError):
            self.tree.delete('nope')

    def test_delete_folder_containing_current(self):
        self.tree.create_folder('a')
        self.tree.create_folder('a/b')
        self.tree.navigate('a/b')

        with self.assertRaises(FolderInUseError):
            self.tree.delete('/a')

        self.assertEqual(self.tree.working_directory().tree_path, '/a/b')
        self.assertTrue((self.disk / 'a' / 'b').is_dir())

    def test_failed_disk_delete_leaves_tree_intact(self):
        folder = self.tree.create_folder('a')
        file = self.tree.create_file('a/f.txt', "x")

        def failing_delete(path):
            raise StorageIOError('delete_file', str(path), cause=PermissionError(13, "denied"))

        self.storage.delete_file = failing_delete
        with self.assertRaises(StorageIOError):
            self.tree.delete('/a/f.txt')

        self.assertIn(file, self.tree.table)
        self.assertIs(self.tree.resolve('/a/f.txt'), file)
        self.assertEqual([c.id for c in folder.children], [file.id])
        self.assertTrue((self.disk / 'a' / 'f.txt').is_file())

    def test_delete_when_disk_object_gone(self):
        self.tree.create_file('a.txt')
        (self.disk / 'a.txt').unlink()

        self.tree.delete('a.txt')

        self.assertIsNone(self.tree.resolve('a.txt'))


class TestRename(TreeTestCase):
    """Test renaming."""

    def test_rename_file(self):
        self.tree.create_file('a.txt', "x")
        entity = self.tree.rename('a.txt', 'b.txt')

        self.assertEqual(entity.name, 'b.txt')
        self.assertIs(self.tree.resolve('b.txt'), entity)
        self.assertFalse((self.disk / 'a.txt').exists())
        self.assertEqual((self.disk / 'b.txt').read_text(), "x")

    def test_rename_folder_moves_subtree(self):
        self.tree.create_folder('a')
        file = self.tree.create_file('a/f.txt', "x")

        self.tree.rename('a', 'b')

        self.assertEqual(file.tree_path, '/b/f.txt')
        self.assertEqual((self.disk / 'b' / 'f.txt').read_text(), "x")
        self.assertEqual(file.content, "x")

    def test_rename_collision(self):
        self.tree.create_folder('a')
        x = self.tree.create_file('/a/x', "1")
        y = self.tree.create_file('/a/y', "2")

        with self.assertRaises(DuplicateNameError):
            self.tree.rename('/a/x', 'y')

        self.assertEqual(x.name, 'x')
        self.assertIs(self.tree.resolve('/a/y'), y)
        self.assertEqual((self.disk / 'a' / 'x').read_text(), "1")

    def test_rename_case_only(self):
        self.tree.create_file('a.txt', "x")
        self.tree.rename('a.txt', 'A.txt')

        self.assertEqual(self.tree.get('a.txt').name, 'A.txt')
        self.assertTrue((self.disk / 'A.txt').exists())

    def test_rename_root_rejected(self):
        with self.assertRaises(RootProtectedError):
            self.tree.rename('/', 'other')

    def test_rename_invalid(self):
        self.tree.create_file('a.txt')
        with self.assertRaises(InvalidNameError):
            self.tree.rename('a.txt', '')
        with self.assertRaises(InvalidNameError):
            self.tree.rename('a.txt', 'x/y')

    def test_rename_without_disk_object(self):
        self.tree.create_file('a.txt', "x")
        (self.disk / 'a.txt').unlink()

        entity = self.tree.rename('a.txt', 'b.txt')

        self.assertEqual(entity.name, 'b.txt')
        self.assertFalse((self.disk / 'b.txt').exists())


class TestMove(TreeTestCase):
    """Test moving."""

    def test_move_then_resolve(self):
        self.tree.create_folder('/a')
        self.tree.create_folder('/b')
        file = self.tree.create_file('/a/f.txt', "x")

        self.tree.move('/a/f.txt', '/b')

        self.assertIs(self.tree.resolve('/b/f.txt'), file)
        with self.assertRaises(EntityNotFoundError):
            self.tree.get('/a/f.txt')
        self.assertFalse((self.disk / 'a' / 'f.txt').exists())
        self.assertEqual((self.disk / 'b' / 'f.txt').read_text(), "x")

    def test_move_folder(self):
        self.tree.create_folder('a')
        self.tree.create_folder('b')
        inner = self.tree.create_file('a/f.txt', "x")

        moved = self.tree.move('a', 'b')

        self.assertIs(moved.parent, self.tree.get('b'))
        self.assertEqual(inner.tree_path, '/b/a/f.txt')
        self.assertTrue((self.disk / 'b' / 'a' / 'f.txt').is_file())
        self.assertFalse((self.disk / 'a').exists())

    def test_move_keeps_current_folder(self):
        self.tree.create_folder('a')
        self.tree.create_folder('b')
        current = self.tree.navigate('a')

        self.tree.move('/a', '/b')

        self.assertIs(self.tree.current_folder, current)
        self.assertEqual(self.tree.working_directory().tree_path, '/b/a')

    def test_move_root_rejected(self):
        self.tree.create_folder('a')
        with self.assertRaises(RootProtectedError):
            self.tree.move('/', 'a')

    def test_move_to_invalid_destination(self):
        self.tree.create_file('a.txt')
        self.tree.create_file('b.txt')
        with self.assertRaises(DestinationInvalidError):
            self.tree.move('a.txt', 'missing')
        with self.assertRaises(DestinationInvalidError):
            self.tree.move('a.txt', 'b.txt')

    def test_move_into_itself(self):
        self.tree.create_folder('a')
        self.tree.create_folder('a/b')

        with self.assertRaises(DestinationInvalidError):
            self.tree.move('a', 'a')
        with self.assertRaises(DestinationInvalidError):
            self.tree.move('a', 'a/b')

        self.assertTrue((self.disk / 'a' / 'b').is_dir())

    def test_move_collision(self):
        self.tree.create_folder('a')
        self.tree.create_file('a/f.txt', "a")
        self.tree.create_file('f.txt', "root")

        with self.assertRaises(DuplicateNameError):
            self.tree.move('f.txt', 'a')

        self.assertEqual((self.disk / 'f.txt').read_text(), "root")

    def test_move_missing_source(self):
        self.tree.create_folder('a')
        with self.assertRaises(EntityNotFoundError):
            self.tree.move('nope', 'a')


class TestCopy(TreeTestCase):
    """Test copying."""

    def test_copy_file(self):
        self.tree.create_folder('b')
        original = self.tree.create_file('a.txt', "data")

        result = self.tree.copy('a.txt', 'b')

        self.assertTrue(result.complete)
        self.assertIsNot(result.entity, original)
        self.assertEqual(result.entity.content, "data")
        self.assertEqual((self.disk / 'b' / 'a.txt').read_text(), "data")
        self.assertEqual((self.disk / 'a.txt').read_text(), "data")

    def test_copy_is_independent(self):
        self.tree.create_folder('b')
        self.tree.create_file('a.txt', "data")
        copy = self.tree.copy('a.txt', 'b').entity

        copy.content = "changed"

        self.assertEqual(self.tree.get('a.txt').content, "data")

    def test_copy_folder_recursive(self):
        self.tree.create_folder('src')
        self.tree.create_folder('src/sub')
        self.tree.create_file('src/sub/deep.txt', "deep")
        self.tree.create_file('src/top.txt', "top")
        self.tree.create_folder('dst')

        result = self.tree.copy('src', 'dst')

        self.assertTrue(result.complete)
        self.assertEqual(self.tree.get('/dst/src/sub/deep.txt').content, "deep")
        self.assertEqual(self.tree.get('/dst/src/top.txt').content, "top")
        self.assertEqual((self.disk / 'dst' / 'src' / 'sub' / 'deep.txt').read_text(), "deep")
        self.assertEqual(self.tree.get('/src/top.txt').content, "top")

    def test_copy_skips_colliding_child(self):
        self.tree.create_folder('src')
        self.tree.create_file('src/a.txt', "a")
        self.tree.create_file('src/b.txt', "b")
        self.tree.create_folder('dst')
        # Left behind on disk, unknown to the tree
        (self.disk / 'dst' / 'src').mkdir()
        (self.disk / 'dst' / 'src' / 'a.txt').write_text("stale")

        result = self.tree.copy('src', 'dst')

        self.assertFalse(result.complete)
        self.assertEqual([s.path for s in result.skipped], ['/src/a.txt'])
        self.assertIsNone(self.tree.resolve('/dst/src/a.txt'))
        self.assertEqual(self.tree.get('/dst/src/b.txt').content, "b")

    def test_copy_collision(self):
        self.tree.create_folder('dst')
        self.tree.create_file('dst/a.txt', "old")
        self.tree.create_file('a.txt', "new")

        with self.assertRaises(DuplicateNameError):
            self.tree.copy('a.txt', 'dst')

        self.assertEqual((self.disk / 'dst' / 'a.txt').read_text(), "old")

    def test_copy_into_itself(self):
        self.tree.create_folder('a')
        self.tree.create_folder('a/b')
        with self.assertRaises(DestinationInvalidError):
            self.tree.copy('a', 'a/b')
        with self.assertRaises(DestinationInvalidError):
            self.tree.copy('/', 'a')

    def test_copy_to_file(self):
        self.tree.create_file('a.txt')
        self.tree.create_file('b.txt')
        with self.assertRaises(DestinationInvalidError):
            self.tree.copy('a.txt', 'b.txt')

    def test_copy_without_disk_source(self):
        self.tree.create_folder('dst')
        self.tree.create_file('a.txt', "memory")
        (self.disk / 'a.txt').unlink()

        result = self.tree.copy('a.txt', 'dst')

        self.assertEqual((self.disk / 'dst' / 'a.txt').read_text(), "memory")
        self.assertEqual(result.entity.content, "memory")


class TestNavigateAndList(TreeTestCase):
    """Test navigation and listing."""

    def test_navigate(self):
        self.tree.create_folder('a')
        folder = self.tree.navigate('a')

        self.assertIs(self.tree.working_directory(), folder)
        self.assertIs(self.tree.navigate('..'), self.tree.root)

    def test_navigate_idempotent(self):
        self.tree.create_folder('a')
        self.tree.navigate('a')
        current = self.tree.current_folder

        self.tree.navigate('.')
        self.tree.navigate('.')

        self.assertIs(self.tree.current_folder, current)

    def test_navigate_failures_keep_current(self):
        self.tree.create_file('a.txt')
        with self.assertRaises(EntityNotFoundError):
            self.tree.navigate('nope')
        with self.assertRaises(NotAFolderError):
            self.tree.navigate('a.txt')
        with self.assertRaises(EntityNotFoundError):
            self.tree.navigate('..')
        self.assertIs(self.tree.current_folder, self.tree.root)

    def test_relative_paths_follow_current(self):
        self.tree.create_folder('a')
        self.tree.navigate('a')
        file = self.tree.create_file('f.txt')

        self.assertEqual(file.tree_path, '/a/f.txt')
        self.assertIs(self.tree.resolve('f.txt'), file)

    def test_list(self):
        self.tree.create_file('b.txt', "bb")
        self.tree.create_folder('a')

        entries = self.tree.list()
        self.assertEqual([(e.name, e.entity_type) for e in entries],
                         [('a', EntityType.FOLDER), ('b.txt', EntityType.FILE)])

        detailed = self.tree.list('/', detailed=True)
        self.assertEqual(detailed[1].size, 2)

    def test_list_failures(self):
        self.tree.create_file('a.txt')
        with self.assertRaises(EntityNotFoundError):
            self.tree.list('nope')
        with self.assertRaises(NotAFolderError):
            self.tree.list('a.txt')


class TestSearch(TreeTestCase):
    """Test search."""

    def setUp(self):
        super().setUp()
        self.tree.create_folder('n')
        self.tree.create_file('/n/note.txt', "hello world")

    def test_content_match_single_hit(self):
        for term in ("hello", "world"):
            hits = self.tree.search(term)
            self.assertEqual(len(hits), 1)
            self.assertEqual(hits[0].tag, 'FIL')
            self.assertEqual(hits[0].path, '/n/note.txt')

    def test_name_and_content_match_once(self):
        self.tree.create_file('/n/hello.txt', "hello again")

        hits = self.tree.search("HELLO")

        self.assertEqual([h.path for h in hits], ['/n/hello.txt', '/n/note.txt'])

    def test_folder_hits(self):
        self.tree.create_folder('/n/notes')

        hits = self.tree.search("note")

        self.assertEqual([(h.tag, h.path) for h in hits],
                         [('FIL', '/n/note.txt'), ('DIR', '/n/notes')])

    def test_no_hits(self):
        self.assertEqual(self.tree.search("absent"), [])

    def test_search_sees_outside_edits(self):
        (self.disk / 'n' / 'note.txt').write_text("changed on disk")
        self.assertEqual(len(self.tree.search("changed")), 1)


class TestFileAccess(TreeTestCase):
    """Test reading and editing through the tree."""

    def test_read_file(self):
        self.tree.create_file('a.txt', "x")
        before = len(self.history.get_history())

        file = self.tree.read_file('a.txt')

        self.assertEqual(file.content, "x")
        self.assertEqual(len(self.history.get_history()), before + 1)

    def test_read_failures(self):
        self.tree.create_folder('a')
        with self.assertRaises(NotAFileError):
            self.tree.read_file('a')
        with self.assertRaises(EntityNotFoundError):
            self.tree.read_file('nope')

    def test_edit_file(self):
        self.tree.create_file('a.txt', "one")

        self.tree.edit_file('a.txt', lambda text: text + LINE_TERMINATOR + "two")

        self.assertEqual((self.disk / 'a.txt').read_text(), "one" + LINE_TERMINATOR + "two")

    def test_line_bounds(self):
        file = self.tree.create_file('a.txt', LINE_TERMINATOR.join(["1", "2", "3"]))

        file.insert_line(4, "x")
        with self.assertRaises(LineNumberOutOfRangeError):
            file.insert_line(6, "x")
        with self.assertRaises(LineNumberOutOfRangeError):
            file.delete_line(0)
        with self.assertRaises(LineNumberOutOfRangeError):
            file.delete_line(5)


class TestInvariants(TreeTestCase):
    """Test properties that hold for any tree."""

    def build(self):
        self.tree.create_folder('a')
        self.tree.create_folder('a/b')
        self.tree.create_file('a/b/c.txt', "ccc")
        self.tree.create_file('a/d.txt', "dd")
        self.tree.create_file('e.txt', "e")

    def test_folder_size_is_sum_of_children(self):
        self.build()
        for entity in self.tree.root.walk():
            if entity.is_folder:
                self.assertEqual(entity.size, sum(c.size for c in entity.children))
        self.assertEqual(self.tree.root.size, 6)

    def test_every_entity_resolves_from_parent(self):
        self.build()
        for entity in self.tree.root.walk():
            path = entity.parent.tree_path.rstrip('/') + '/' + entity.name
            self.assertIs(self.tree.resolve(path), entity)

    def test_every_entity_has_one_parent(self):
        self.build()
        self.tree.move('a/d.txt', 'a/b')
        self.tree.delete('a/b/c.txt')

        for entity in self.tree.table:
            if entity.is_root:
                continue
            siblings = [c.id for c in entity.parent.children]
            self.assertEqual(siblings.count(entity.id), 1)
        self.assertEqual(len(self.tree.table), 1 + len(list(self.tree.root.walk())))

    def test_disk_matches_tree(self):
        self.build()
        self.tree.move('a/d.txt', 'a/b')
        self.tree.rename('a/b', 'bee')
        self.tree.copy('e.txt', 'a')
        self.tree.delete('e.txt')

        on_disk = sorted(
            str(p.relative_to(self.disk)).replace('\\', '/')
            for p in self.disk.rglob('*')
        )
        in_tree = sorted(e.tree_path.lstrip('/') for e in self.tree.root.walk())
        self.assertEqual(on_disk, in_tree)

    def test_sessions_are_independent(self):
        other = TreeManager(self.storage, root_name='other')
        other.create_folder('x')

        self.assertIsNone(self.tree.resolve('x'))
        self.assertIs(self.tree.current_folder, self.tree.root)


class TestLoadPhysicalStorage(TreeTestCase):
    """Test mirroring an existing directory into the tree."""

    def test_reload_session(self):
        self.tree.create_folder('a')
        self.tree.create_file('a/f.txt', "persisted")

        tree = self.new_tree()

        self.assertEqual(tree.get('/a/f.txt').content, "persisted")

    def test_load_counts_and_timestamps(self):
        (self.disk / 'x' / 'y').mkdir(parents=True)
        (self.disk / 'x' / 'y' / 'z.txt').write_text("z")
        (self.disk / 'w.txt').write_text("w")

        loaded = self.tree.load_physical_storage()

        self.assertEqual(loaded, 4)
        z = self.tree.get('x/y/z.txt')
        st = (self.disk / 'x' / 'y' / 'z.txt').stat()
        self.assertAlmostEqual(z.modified, st.st_mtime, places=3)

    def test_load_below_first_level(self):
        (self.disk / 'a' / 'b').mkdir(parents=True)
        (self.disk / 'a' / 'f.txt').write_text("f")
        (self.disk / 'a' / 'b' / 'g.txt').write_text("g")

        tree = self.new_tree()

        self.assertEqual([c.name for c in tree.root.children], ['a'])
        self.assertEqual([c.name for c in tree.get('/a').children], ['b', 'f.txt'])
        self.assertEqual(tree.get('/a/f.txt').content, "f")
        self.assertEqual(tree.get('/a/b/g.txt').content, "g")

    def test_new_disk_entries_inside_existing_folder(self):
        folder = self.tree.create_folder('a')
        (self.disk / 'a' / 'new.txt').write_text("outside")

        loaded = self.tree.load_physical_storage()

        self.assertEqual(loaded, 1)
        self.assertIs(self.tree.get('/a/new.txt').parent, folder)

    def test_existing_names_skipped(self):
        self.tree.create_file('a.txt', "tree")

        loaded = self.tree.load_physical_storage()

        self.assertEqual(loaded, 0)
        self.assertEqual(len(self.tree.root.children), 1)

    def test_folders_listed_before_files_loaded(self):
        (self.disk / 'm').mkdir()
        (self.disk / 'k.txt').write_text("")

        self.tree.load_physical_storage()

        self.assertEqual([c.name for c in self.tree.root.children], ['m', 'k.txt'])

    def test_missing_root_directory_recreated(self):
        self.disk.rmdir()
        self.assertEqual(self.tree.load_physical_storage(), 0)
        self.assertTrue(self.disk.is_dir())


if __name__ == '__main__':
    unittest.main()
