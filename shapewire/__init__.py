"""shapewire: shape inference for feed-forward network configurations.

A network is declared as an input layout plus a stack of layers. shapewire
walks the stack, inserts the preprocessors needed between incompatible
layouts (sequence → vector, image volume → vector), infers each layer's
input width from its predecessor and fails early, naming the layer, when
two layers cannot be wired together.

Core workflows:
- Contract: per-layer preprocessor selection, n_in inference, output layout
- Compile: propagate shapes through a YAML/JSON manifest
- Inspect: print the wired plan as text or a rich table
"""
