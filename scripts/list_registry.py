import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roichart.registry import load_registry_from_yaml

def main():
    reg = load_registry_from_yaml(ROOT / "configs" / "datasets.yaml")
    print('Registered sources:')
    for name in reg.list():
        print(" -", name)

if __name__ == '__main__':
    main()
