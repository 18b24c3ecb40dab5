"""Integration tests for status command."""

from click.testing import CliRunner
from twig.cli.main import cli

SECTIONS = [
    '=== Branches ===',
    '=== Staged Files ===',
    '=== Removed Files ===',
    '=== Modifications Not Staged For Commit ===',
    '=== Untracked Files ===',
]


def section_lines(output, title):
    """Lines listed under one status section."""
    lines = output.splitlines()
    start = lines.index(f'=== {title} ===') + 1
    body = []
    for line in lines[start:]:
        if not line:
            break
        body.append(line)
    return body


class TestStatusCommand:
    """Tests for twig status command."""

    def test_status_sections_in_order(self, repo):
        """Test all five sections are printed in order."""
        result = CliRunner().invoke(cli, ['status'])

        assert result.exit_code == 0
        positions = [result.output.index(title) for title in SECTIONS]
        assert positions == sorted(positions)
        assert section_lines(result.output, 'Branches') == ['*master']

    def test_status_lists_every_kind_of_change(self, repo):
        """Test each section picks up its kind of change."""
        runner = CliRunner()
        for name in ('gone.txt', 'edited.txt', 'removed.txt'):
            (repo.work_tree / name).write_text(name)
            runner.invoke(cli, ['add', name])
        runner.invoke(cli, ['commit', 'Base'])
        runner.invoke(cli, ['branch', 'feature'])

        (repo.work_tree / 'staged.txt').write_text('staged')
        runner.invoke(cli, ['add', 'staged.txt'])
        runner.invoke(cli, ['rm', 'removed.txt'])
        (repo.work_tree / 'gone.txt').unlink()
        (repo.work_tree / 'edited.txt').write_text('changed')
        (repo.work_tree / 'new.txt').write_text('new')

        output = runner.invoke(cli, ['status']).output

        assert section_lines(output, 'Branches') == ['feature', '*master']
        assert section_lines(output, 'Staged Files') == ['staged.txt']
        assert section_lines(output, 'Removed Files') == ['removed.txt']
        assert section_lines(output, 'Modifications Not Staged For Commit') == [
            'edited.txt (modified)',
            'gone.txt (deleted)',
        ]
        assert section_lines(output, 'Untracked Files') == ['new.txt']
