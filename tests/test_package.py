import subprocess
import sys


def test_model_modules_do_not_load_protobuf_schema():
    code = (
        "import sys, phenobuilder.phenopacket, phenobuilder.examples; "
        "assert 'phenopackets' not in sys.modules, sorted(sys.modules)"
    )
    subprocess.run([sys.executable, "-c", code], check=True)
