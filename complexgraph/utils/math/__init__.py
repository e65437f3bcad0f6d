from .complex import Complex, Polar
