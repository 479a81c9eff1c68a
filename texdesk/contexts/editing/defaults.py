"""
Default content for a fresh editor.

DEFAULT_TEMPLATE is a placeholder resume written in the subset of LaTeX the
preview understands: centered name block, bold-large section headers,
\hfill-aligned dates and itemize bullets.
"""

DEFAULT_TEMPLATE = r"""\documentclass{article}
\usepackage[margin=0.75in]{geometry}
\usepackage{enumitem}
\usepackage{hyperref}

\pagestyle{empty}

\begin{document}

\begin{center}
{\Large \textbf{[YOUR FULL NAME]}} \\
\vspace{2mm}
[YOUR PHONE NUMBER] | [YOUR EMAIL] | [YOUR GITHUB] | [YOUR LINKEDIN]
\end{center}

\vspace{4mm}

\noindent\textbf{\large EXPERIENCE}
\vspace{2mm}

\noindent\textbf{[Job Title]} \hfill [Start Date] -- [End Date] \\
\textit{[Company Name]} \hfill [City, State] \\
\vspace{-4mm}
\begin{itemize}[leftmargin=*, itemsep=1pt]
\item \textbf{[Action Verb]} [Accomplishment with quantifiable impact].
\item \textbf{[Action Verb]} [Leadership or collaboration example].
\item \textbf{[Action Verb]} [Additional achievement or responsibility].
\end{itemize}

\noindent\textbf{[Job Title]} \hfill [Start Date] -- [End Date] \\
\textit{[Company Name]} \hfill [City, State] \\
\vspace{-4mm}
\begin{itemize}[leftmargin=*, itemsep=1pt]
\item \textbf{[Action Verb]} [Accomplishment with quantifiable impact].
\item \textbf{[Action Verb]} [Leadership or collaboration example].
\end{itemize}

\vspace{4mm}

\noindent\textbf{\large SKILLS}
\vspace{2mm}

\noindent\textbf{Languages:} [Language 1], [Language 2], [Language 3] \\
\textbf{Frontend:} [Framework 1], [Framework 2], [Tool 1] \\
\textbf{Backend:} [Technology 1], [Technology 2], [Tool 1]

\end{document}
"""
