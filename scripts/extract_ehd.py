#!/usr/bin/env python3
"""
Extract Edge Histogram Descriptors for a single image or a directory

Usage:
    # Single image
    python scripts/extract_ehd.py --image sample.png --output sample_ehd.csv

    # Directory (batch), normalized 8x8 blocks, cropping images to a valid size
    python scripts/extract_ehd.py --input-dir dataset/images/ --normalize \
        --horizontal-blocks 8 --vertical-blocks 8 --crop --output outputs/ehd.csv

    # Settings from a YAML file (flags given on the command line win)
    python scripts/extract_ehd.py --input-dir dataset/images/ --config configs/ehd.yaml
"""

import argparse
import dataclasses
import sys
from pathlib import Path

import pandas as pd
from tqdm import tqdm

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ehd.config import EdgeHistogramConfig, load_config
from ehd.exceptions import EHDError
from ehd.features import EdgeHistogramDescriptor
from ehd.utils import setup_logger, get_timestamp, load_gray, crop_to_grid

IMAGE_PATTERNS = ['*.jpg', '*.jpeg', '*.png', '*.bmp', '*.tif', '*.tiff',
                  '*.JPG', '*.JPEG', '*.PNG', '*.BMP', '*.TIF', '*.TIFF']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Extract Edge Histogram Descriptors (EHD)')

    # Input/output
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--image', type=str, help='Single image file')
    source.add_argument('--input-dir', type=str, help='Directory containing images')
    parser.add_argument('--output', type=str, default=None,
                       help='CSV file to save results (default: ehd_<timestamp>.csv)')
    parser.add_argument('--log-file', type=str, default=None,
                       help='Optional log file')

    # Descriptor parameters
    parser.add_argument('--config', type=str, default=None,
                       help='YAML config with EHD settings')
    parser.add_argument('--threshold', type=float, default=None,
                       help='Minimum cell vote to count as an edge (default: 50)')
    parser.add_argument('--normalize', action='store_true', default=None,
                       help='Normalize bins by cell counts')
    parser.add_argument('--horizontal-blocks', type=int, default=None,
                       help='Blocks across the image width, multiple of 4 (default: 4)')
    parser.add_argument('--vertical-blocks', type=int, default=None,
                       help='Blocks down the image height, multiple of 4 (default: 4)')
    parser.add_argument('--n-jobs', type=int, default=None,
                       help='Parallel workers per image (default: 1)')

    # Options
    parser.add_argument('--crop', action='store_true',
                       help='Center-crop images to the nearest valid size')

    return parser


def resolve_config(args: argparse.Namespace) -> EdgeHistogramConfig:
    """Merge YAML config (if any) with command line overrides"""
    config = load_config(args.config) if args.config else EdgeHistogramConfig()

    overrides = {
        'threshold': args.threshold,
        'normalize': args.normalize,
        'horizontal_blocks': args.horizontal_blocks,
        'vertical_blocks': args.vertical_blocks,
        'n_jobs': args.n_jobs,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(config, **overrides)


def find_images(input_dir: Path) -> list:
    image_files = set()
    for pattern in IMAGE_PATTERNS:
        image_files.update(input_dir.glob(pattern))
    return sorted(image_files)


def process_image(img_path: Path, config: EdgeHistogramConfig, crop: bool) -> dict:
    """Compute the descriptor of one image file as a result row"""
    gray = load_gray(img_path)
    if crop:
        gray = crop_to_grid(gray, config.horizontal_blocks, config.vertical_blocks)

    descriptor = EdgeHistogramDescriptor(gray, config)
    result = {
        'filename': img_path.name,
        'filepath': str(img_path),
        'height': gray.shape[0],
        'width': gray.shape[1],
        'status': 'ok',
        'error': '',
    }
    result.update(descriptor.extract_features())
    return result


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger('ehd', log_file=args.log_file)

    try:
        config = resolve_config(args)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    if args.image:
        image_files = [Path(args.image)]
    else:
        input_dir = Path(args.input_dir)
        if not input_dir.is_dir():
            logger.error(f"Input directory not found: {input_dir}")
            return 2
        image_files = find_images(input_dir)

    csv_path = Path(args.output) if args.output else Path(f'ehd_{get_timestamp()}.csv')

    logger.info(f"Found {len(image_files)} images")
    logger.info(f"EHD config: {config.to_dict()}")

    results = []
    for img_path in tqdm(image_files, disable=len(image_files) < 2):
        try:
            result = process_image(img_path, config, args.crop)
        except (EHDError, ValueError, FileNotFoundError) as e:
            logger.warning(f"Skipping {img_path.name}: {e}")
            result = {
                'filename': img_path.name,
                'filepath': str(img_path),
                'status': 'error',
                'error': str(e),
            }
        results.append(result)

    # Save results to CSV
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(results)
    df.to_csv(csv_path, index=False)

    ok_count = int((df['status'] == 'ok').sum()) if len(df) else 0
    logger.info(f"Processed {ok_count}/{len(results)} images")
    logger.info(f"Results saved to: {csv_path}")

    return 0 if ok_count > 0 else 1


if __name__ == '__main__':
    sys.exit(main())
