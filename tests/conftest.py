import matplotlib

matplotlib.use('Agg')

import pytest


@pytest.fixture
def workload_file(tmp_path):
    def _write(content):
        path = tmp_path / "workload.txt"
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
