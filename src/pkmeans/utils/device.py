"""
Device selection for the clustering tensors.

The engine is single-threaded and synchronous; CPU is the default so that
results do not depend on which accelerator happens to be present.
"""

from typing import Optional, Union, Dict
import torch
import warnings


def get_default_device() -> torch.device:
    """CUDA when present, otherwise CPU."""
    return torch.device('cuda' if torch.cuda.is_available() else 'cpu')


def parse_device(device: Optional[Union[str, torch.device]] = None) -> torch.device:
    """Parse device specification.

    Args:
        device: Device specification
            - None: CPU
            - 'auto': Use best available
            - 'cpu': Use CPU
            - 'cuda': Use default CUDA device
            - 'cuda:X': Use CUDA device X
            - torch.device: Use as-is

    Returns:
        Parsed device
    """
    if device is None:
        return torch.device('cpu')

    if isinstance(device, torch.device):
        return device

    if isinstance(device, str):
        if device == 'auto':
            return get_default_device()
        elif device == 'cpu':
            return torch.device('cpu')
        elif device.startswith('cuda'):
            if not torch.cuda.is_available():
                warnings.warn("CUDA not available, falling back to CPU")
                return torch.device('cpu')
            return torch.device(device)
        else:
            raise ValueError(f"Unknown device: {device}")
    else:
        raise TypeError(f"Device must be str or torch.device, got {type(device)}")


def estimate_memory_usage(n_samples: int, n_features: int, n_clusters: int,
                          dtype: torch.dtype = torch.float64) -> Dict[str, int]:
    """Estimate the working memory of one partition run, in bytes.

    Args:
        n_samples: Number of rows N
        n_features: Vector dimension d
        n_clusters: Number of clusters k
        dtype: Data type of the vectors

    Returns:
        Dictionary with memory estimates in bytes
    """
    bytes_per_element = torch.empty((), dtype=dtype).element_size()

    estimates = {}
    estimates['data'] = n_samples * n_features * bytes_per_element
    estimates['min_max'] = 2 * n_features * bytes_per_element
    estimates['centers'] = n_clusters * n_features * bytes_per_element
    # Per-cluster sums and counts of the update step
    estimates['sums'] = n_clusters * n_features * bytes_per_element + n_clusters * 8
    estimates['distances'] = n_samples * n_clusters * bytes_per_element
    estimates['labels'] = n_samples * 8  # int64

    estimates['total'] = sum(estimates.values())

    return estimates
