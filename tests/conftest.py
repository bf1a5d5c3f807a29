import pytest


@pytest.fixture
def edge_file(tmp_path):
    def write(*lines, name='cities.txt'):
        path = tmp_path / name
        path.write_text(''.join(line + '\n' for line in lines), encoding='utf-8')
        return str(path)
    return write
