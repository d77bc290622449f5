from htpy import Renderable, div, h1, main, p


def home() -> Renderable:
    return div(".min-h-screen.p-8.font-mono")[
        main(".max-w-4xl.mx-auto")[
            h1(".text-4xl.font-bold.mb-8")["Data Analyzer"],
            p(class_="text-lg text-foreground/80")[
                "Welcome to your data analysis dashboard."
            ],
        ]
    ]
