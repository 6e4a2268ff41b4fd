# Core utilities: configuration-independent building blocks
